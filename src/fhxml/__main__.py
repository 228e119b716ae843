import sys

from fhxml.cli import main

sys.exit(main())
