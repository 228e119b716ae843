"""Cache a parsed FHX tree to disk: JSON round-trip."""

from fhxml import parse
from fhxml.serialization import from_json, to_json

doc = parse('AREA NAME="AREA_A" { DESCRIPTION="Pumps" MASK={0a ff} INDEX=[1,5..7] }')

json_str = to_json(doc)
restored = from_json(json_str)

print("Original == restored:", doc == restored)
print("JSON length:", len(json_str), "chars")
