"""Thread safe: convert 1000 exports in parallel, each with its own config."""

from concurrent.futures import ThreadPoolExecutor

from fhxml import Converter, ConvertConfig

sources = [f'MODULE TAG="PUMP_{i}" {{ SCAN={i} }}' for i in range(1000)]

tabs = Converter()
spaces = Converter(ConvertConfig(indent="  ", wrap_root=True))

with ThreadPoolExecutor(max_workers=8) as ex:
    tabbed = list(ex.map(tabs, sources))
    spaced = list(ex.map(spaces, sources))

print(f"Converted {len(tabbed) + len(spaced)} documents in parallel")
print(tabbed[0])
print(spaced[-1])
