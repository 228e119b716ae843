"""Convert an FHX snippet to XML in 3 lines: zero config, zero deps."""

from fhxml import parse, render

doc = parse('MODULE TAG="PUMP_101" { DESCRIPTION="Main pump" SCAN=1 }')
xml = render(doc)
print(xml)
