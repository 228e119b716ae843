"""File conversion driver.

Thin I/O layer around parse() and render():

- read an FHX export in its declared encoding (UTF-16 by default)
- normalise line endings, parse, render
- write the XML in the output encoding (UTF-8 by default)

Nothing is written when the source fails to parse. The driver also knows the
project's file conventions (``POWER.fhx`` -> ``POWER.xml``), discovers inputs
in a directory, and can compare a produced file against an exemplar.

Example:
    from fhxml.convert import convert_file, matches_exemplar

    result = convert_file("exports/POWER.fhx")
    print(f"{result.element_count} elements in {result.elapsed_seconds:.3f}s")
    assert matches_exemplar(result.output_path, "exports/POWER_EXEMPLAR.xml")

"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from time import perf_counter

from fhxml import parse, render
from fhxml.config import ConvertConfig, convert_config_context, get_convert_config
from fhxml.errors import ConversionError, ParseError
from fhxml.profiling import profiled_convert
from fhxml.utils.logger import get_logger
from fhxml.utils.text import normalize_newlines

logger = get_logger(__name__)

FHX_SUFFIX = ".fhx"
XML_SUFFIX = ".xml"


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Outcome of converting one file.

    Attributes:
        input_path: FHX file that was read
        output_path: XML file that was written
        element_count: Number of elements in the parsed tree
        parse_seconds: Time spent parsing
        render_seconds: Time spent rendering
        elapsed_seconds: Wall time for the whole conversion, I/O included

    """

    input_path: Path
    output_path: Path
    element_count: int
    parse_seconds: float
    render_seconds: float
    elapsed_seconds: float


def output_path_for(path: str | Path, output_dir: str | Path | None = None) -> Path:
    """Derive the XML path for an FHX file.

    ``POWER.fhx`` becomes ``POWER.xml``; any other name gets ``.xml``
    appended. With ``output_dir`` the file name is placed in that directory.

    Examples:
        >>> output_path_for("in/POWER.fhx")
        PosixPath('in/POWER.xml')
        >>> output_path_for("in/POWER.FHX", "out")
        PosixPath('out/POWER.xml')
        >>> output_path_for("notes.txt").name
        'notes.txt.xml'
    """
    source = Path(path)
    if source.suffix.lower() == FHX_SUFFIX:
        target = source.with_suffix(XML_SUFFIX)
    else:
        target = source.with_name(source.name + XML_SUFFIX)
    if output_dir is not None:
        return Path(output_dir) / target.name
    return target


def collect_inputs(path: str | Path) -> list[Path]:
    """Resolve a file or directory argument to the FHX files to convert.

    Raises:
        FileNotFoundError: If the path does not exist or a directory holds
            no ``.fhx`` files.
    """
    source = Path(path)
    if source.is_dir():
        files = sorted(
            p for p in source.iterdir() if p.is_file() and p.suffix.lower() == FHX_SUFFIX
        )
        if not files:
            raise FileNotFoundError(f"No .fhx files found in directory: {source}")
        return files
    if source.is_file():
        return [source]
    raise FileNotFoundError(f"Input path does not exist: {source}")


def convert_text(text: str, config: ConvertConfig | None = None, *, source_file: str | None = None) -> str:
    """Convert FHX text to XML text.

    Line endings are normalised to ``\\n`` before parsing.

    Raises:
        ParseError: If the text does not match the FHX grammar.
    """
    config = config or get_convert_config()
    with convert_config_context(config):
        return render(parse(normalize_newlines(text), source_file=source_file))


def convert_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    config: ConvertConfig | None = None,
) -> ConversionResult:
    """Convert one FHX file to XML.

    Args:
        input_path: FHX file to read
        output_path: XML file to write (default: ``output_path_for(input_path)``)
        config: Conversion settings (default: the active config)

    Returns:
        ConversionResult describing the written file

    Raises:
        ConversionError: If the input cannot be read or decoded, does not
            parse, or the output cannot be written. The output file is not
            created when parsing fails.
    """
    config = config or get_convert_config()
    source = Path(input_path)
    destination = Path(output_path) if output_path is not None else output_path_for(source)
    started = perf_counter()

    logger.info("Parsing %s", source)
    try:
        text = source.read_text(encoding=config.input_encoding)
    except (OSError, UnicodeError) as exc:
        raise ConversionError(str(source), f"cannot read input: {exc}") from exc

    with convert_config_context(config), profiled_convert() as metrics:
        try:
            doc = parse(normalize_newlines(text), source_file=str(source))
        except ParseError as exc:
            logger.error("Parse failed: %s", exc)
            raise ConversionError(str(source), str(exc)) from exc
        xml = render(doc)

    logger.info("Writing %s", destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(xml, encoding=config.output_encoding, newline="\n")
    except (OSError, UnicodeError) as exc:
        raise ConversionError(str(source), f"cannot write {destination}: {exc}") from exc

    return ConversionResult(
        input_path=source,
        output_path=destination,
        element_count=metrics.element_count,
        parse_seconds=metrics.parse_seconds,
        render_seconds=metrics.render_seconds,
        elapsed_seconds=perf_counter() - started,
    )


def first_difference(
    output_path: str | Path,
    exemplar_path: str | Path,
    encoding: str = "utf-8",
) -> int | None:
    """Return the 1-based number of the first line that differs, or None.

    Line-ending style is ignored; a missing line counts as a difference.
    """
    produced = Path(output_path).read_text(encoding=encoding).splitlines()
    expected = Path(exemplar_path).read_text(encoding=encoding).splitlines()
    for lineno, (left, right) in enumerate(zip(produced, expected), start=1):
        if left != right:
            return lineno
    if len(produced) != len(expected):
        return min(len(produced), len(expected)) + 1
    return None


def matches_exemplar(
    output_path: str | Path,
    exemplar_path: str | Path,
    encoding: str = "utf-8",
) -> bool:
    """Check a produced XML file against a reference file, line by line."""
    return first_difference(output_path, exemplar_path, encoding) is None

