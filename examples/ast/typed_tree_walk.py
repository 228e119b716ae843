"""Typed tree: list every function block and its definition."""

from fhxml import parse
from fhxml.nodes import QuotedString

source = """
MODULE TAG="PUMP_101"
{
  FUNCTION_BLOCK NAME="AI1" DEFINITION="AI" { }
  FUNCTION_BLOCK NAME="PID1" DEFINITION="PID" { }
  ATTRIBUTE NAME="HI_LIM" { VALUE { CV=100 } }
}
"""

doc = parse(source)

for element in doc.iter_elements():
    if element.name != "FUNCTION_BLOCK":
        continue
    name = element.get("NAME")
    definition = element.get("DEFINITION")
    if isinstance(name, QuotedString) and isinstance(definition, QuotedString):
        print(f"{name.text}: {definition.text}")
