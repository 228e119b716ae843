"""Opt-in profiling: time parse and render separately."""

from fhxml import convert
from fhxml.profiling import profiled_convert

source = "\n".join(
    f'MODULE TAG="M{i}" {{ FUNCTION_BLOCK NAME="AI{i}" DEFINITION="AI" {{ SCAN=1 }} }}'
    for i in range(500)
)

with profiled_convert() as metrics:
    xml = convert(source)

print(metrics.summary())
