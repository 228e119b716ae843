"""cProfile wrapper for fhxml conversion.

Run with:
    python -m cProfile -o profile.prof benchmarks/profile_convert.py
    python -m snakeviz profile.prof

Or for direct profiling:
    python benchmarks/profile_convert.py [EXPORT.fhx]
"""

from __future__ import annotations

import cProfile
import io
import pstats
import sys
from pathlib import Path


def synthetic_export(modules: int = 2000) -> str:
    """Build a large FHX export resembling a plant configuration."""
    parts = ['/* Version: 14.3.1 */\nAREA NAME="AREA_A" { DESCRIPTION="Synthetic" }']
    for i in range(modules):
        parts.append(
            f"""MODULE TAG="PUMP_{i}" PLANT_AREA="AREA_A" CATEGORY="Library/Pumps"
{{
  DESCRIPTION="Pump {i} ""main"" feed"
  PERIOD=1
  FUNCTION_BLOCK NAME="AI1" DEFINITION="AI"
  {{
    DESCRIPTION=""
    ID=[1,2,5..7]
    POSITION=(1|2.5/-3)
    MASK={{0a ff 1B}}
  }}
  /* alarms /* nested */ */
  ATTRIBUTE NAME="HI_LIM" TYPE=FLOAT {{ VALUE {{ CV=100 }} }}
  WIRES = {{ }}
}}"""
        )
    return "\n".join(parts)


def load_source(argv: list[str]) -> str:
    if len(argv) > 1:
        return Path(argv[1]).read_text(encoding="utf-16")
    return synthetic_export()


def convert_repeatedly(source: str, iterations: int = 5) -> None:
    from fhxml import Converter

    converter = Converter()
    for _ in range(iterations):
        converter(source)


def main() -> None:
    """Run profiling and print results."""
    print("fhxml Profiling")
    print("=" * 60)
    print(f"Python {sys.version.split()[0]}")

    source = load_source(sys.argv)
    iterations = 5
    print(f"\nConverting {len(source)} characters {iterations}x...")

    profiler = cProfile.Profile()
    profiler.enable()

    convert_repeatedly(source, iterations)

    profiler.disable()

    print("\n" + "=" * 60)
    print("TOP 30 FUNCTIONS BY CUMULATIVE TIME")
    print("=" * 60 + "\n")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(pstats.SortKey.CUMULATIVE)
    ps.print_stats(30)
    print(s.getvalue())

    print("\n" + "=" * 60)
    print("TOP 30 FUNCTIONS BY TOTAL (SELF) TIME")
    print("=" * 60 + "\n")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(pstats.SortKey.TIME)
    ps.print_stats(30)
    print(s.getvalue())


if __name__ == "__main__":
    main()
