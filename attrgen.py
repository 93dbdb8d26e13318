"""Tag attribute accessor generator.

Reads Kotlin/JS DOM declarations (`public external abstract class ...` and
`public external interface ...` blocks) and emits `Tag<T>` attribute accessor
functions for every type that descends from HTMLElement.

Usage:
    python attrgen.py path/to/org.w3c.dom.kt > HtmlTagAttributes.kt
"""

import argparse
import re
import sys
from collections import deque
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import NamedTuple

DEFAULT_ROOT_TYPE = "HTMLElement"


# ===--- CLI config contracts ---=== #


@dataclass(frozen=True)
class GenerateConfig:
    input_path: Path
    output_path: Path | None
    root_type: str
    html_only: bool


VALID_ERROR_CODES = {
    "PATH_NOT_FOUND",
    "INVALID_TYPE_NAME",
    "OUTPUT_IS_DIRECTORY",
}
_TYPE_NAME_ARG_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


def validate_input_path(path: Path | None) -> Path:
    if path is None:
        raise ConfigError(
            "PATH_NOT_FOUND",
            "An input declaration listing is required: no path provided.",
            "Pass the listing path as the first argument.",
        )
    if path.is_file():
        return path
    raise ConfigError(
        "PATH_NOT_FOUND",
        f"Input listing does not exist or is not a file: {path}",
        "Provide an existing Kotlin/JS declaration file.",
    )


def validate_root_type(name: str) -> str:
    if _TYPE_NAME_ARG_RE.match(name):
        return name
    raise ConfigError(
        "INVALID_TYPE_NAME",
        f"Invalid root type name: {name!r}",
        "Root type names are plain identifiers (for example HTMLElement).",
    )


def validate_output_path(path: Path | None) -> Path | None:
    if path is not None and path.is_dir():
        raise ConfigError(
            "OUTPUT_IS_DIRECTORY",
            f"--output points to a directory: {path}",
            "Pass a file path, e.g. --output HtmlTagAttributes.kt",
        )
    return path


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Tag<T> attribute accessors from DOM declarations"
    )

    parser.add_argument("input", type=Path)
    parser.add_argument("--output", type=Path, default=None)
    parser.add_argument("--root-type", type=str, default=DEFAULT_ROOT_TYPE)
    parser.add_argument("--html-only", action="store_true", default=False)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_argument_parser()
    return parser.parse_args(argv)


def validate_config(args: argparse.Namespace) -> GenerateConfig:
    return GenerateConfig(
        input_path=validate_input_path(args.input),
        output_path=validate_output_path(args.output),
        root_type=validate_root_type(args.root_type),
        html_only=bool(args.html_only),
    )


def build_config(argv: list[str] | None = None) -> GenerateConfig:
    return validate_config(parse_args(argv))


# ===--- Constants ---=== #

BLOCK_OPENER_PREFIXES: tuple[str, ...] = (
    "public external abstract class",
    "public external interface",
)
BLOCK_TERMINATOR = "}"
HTML_NAME_PREFIX = "HTML"

_TYPE_NAME_RE = re.compile(r"(?:class|interface)\s+([A-Za-z0-9_]+)")
_PARENT_RE = re.compile(r"[A-Za-z0-9<>]+")
_PROPERTY_RE = re.compile(r"var ([^\s:]+): ([A-Za-z0-9?]+)")
_INLINE_EMPTY_BLOCK_RE = re.compile(r"\{\s*\}")

# Markup names that are reserved words in the generated Kotlin.
NAME_ESCAPES = {
    "htmlFor": "`for`",
    "_object": "`object`",
}
DISPLAY_NAME_REMAPS = {
    "htmlFor": "for",
    "`as`": "as",
    "_object": "object",
}

DYNAMIC_TYPE = "dynamic"
TEXT_TYPE = "String"
BOOLEAN_TYPE = "Boolean"
COMMENT_TYPE = "Comment"

# Handled by the Tag DSL itself, never generated.
EXCLUDED_ATTRIBUTE = "className"

SPECIAL_DOM_API_ATTRIBUTES: frozenset[tuple[str, str]] = frozenset(
    {
        ("HTMLInputElement", "checked"),
        ("HTMLInputElement", "value"),
        ("HTMLMediaElement", "playbackRate"),
        ("HTMLMediaElement", "muted"),
        ("HTMLOptionElement", "selected"),
        ("HTMLOutputElement", "value"),
        ("HTMLTextAreaElement", "value"),
    }
)
"""(type, attribute) pairs whose value must be written to the live DOM node.

Setting only the markup attribute does not update the rendered state of these
properties once the user has interacted with the element, so the generated
accessor assigns the node property and its `default*` counterpart as well."""


# ===--- Data classes ---=== #


class AttributeKind(Enum):
    PLAIN = "plain"
    BOOLEAN = "boolean"
    COMMENT = "comment"


class BindingShape(Enum):
    DEFAULT = "default"
    SPECIAL_DOM = "special-dom"


@dataclass(frozen=True)
class Attribute:
    """One property of a declared type, ready for emission.

    Attributes:
        name: Identifier used in generated code (escaped when reserved).
        source_type: Declared Kotlin type, `"Boolean"`, or `"Comment"` for
            the synthetic inherited-attributes banner.
        display_name: Lower-cased markup attribute name used inside string
            literals. Empty for comment attributes.
    """

    name: str
    source_type: str
    display_name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Attribute name must not be empty")

    @property
    def kind(self) -> AttributeKind:
        if self.source_type == COMMENT_TYPE:
            return AttributeKind.COMMENT
        if self.source_type == BOOLEAN_TYPE:
            return AttributeKind.BOOLEAN
        return AttributeKind.PLAIN

    @property
    def value_as_string(self) -> str:
        return "value" if self.source_type == TEXT_TYPE else "value.toString()"


@dataclass(frozen=True)
class HtmlTag:
    """A declared type with its attributes and parent names.

    Attributes:
        name: Declared type name, e.g. "HTMLInputElement".
        attributes: Attributes in declaration order. After resolution the
            inherited foreign-ancestor attributes are appended.
        parents: Parent type names in declaration order, duplicates kept.
        line_number: 1-based line of the declaration opener, 0 when unknown.
    """

    name: str
    attributes: tuple[Attribute, ...] = ()
    parents: tuple[str, ...] = ()
    line_number: int = 0


class BlockScan(NamedTuple):
    attributes: tuple[Attribute, ...]
    consumed: int


class ExtractionError(ValueError):
    def __init__(self, code: str, message: str, line_number: int):
        super().__init__(f"line {line_number}: {message}")
        self.code = code
        self.message = message
        self.line_number = line_number


class RegistryError(RuntimeError):
    """Raised when a hierarchy query reaches a name the registry lacks."""


# ===--- S1 Declaration extraction ---=== #


def is_block_opener(line: str, html_only: bool = False) -> bool:
    """Return True if line opens a recognized external declaration block.

    Args:
        line: Raw input line.
        html_only: Also require the declared type name to start with "HTML".

    Returns:
        True when the line starts with one of BLOCK_OPENER_PREFIXES (and,
        for html_only, declares an HTML-prefixed name).
    """
    if not any(line.startswith(prefix) for prefix in BLOCK_OPENER_PREFIXES):
        return False
    if not html_only:
        return True
    match = _TYPE_NAME_RE.search(line)
    return match is not None and match.group(1).startswith(HTML_NAME_PREFIX)


def parse_type_name(line: str, line_number: int = 0) -> str:
    match = _TYPE_NAME_RE.search(line)
    if match is None:
        raise ExtractionError(
            "MISSING_TYPE_NAME",
            f"declaration opener has no type name: {line.strip()!r}",
            line_number,
        )
    return match.group(1)


def parse_parents(line: str) -> tuple[str, ...]:
    """Return parent type tokens declared after the first colon of line.

    Generic brackets stay part of the token (`ItemArrayLike<Node>`), so
    generic parents never collide with plain registry names.
    """
    if ":" not in line:
        return ()
    _, inheritance = line.split(":", maxsplit=1)
    return tuple(_PARENT_RE.findall(inheritance))


def normalize_attribute(raw_name: str, raw_type: str) -> Attribute:
    """Build an Attribute from a matched property name and declared type.

    Args:
        raw_name: Property name as declared, e.g. "htmlFor" or "`as`".
        raw_type: Declared type token, e.g. "String", "Boolean", "dynamic".

    Returns:
        Attribute with the escaped code name, normalized type and lower-cased
        markup name.
    """
    return Attribute(
        name=NAME_ESCAPES.get(raw_name, raw_name),
        source_type=TEXT_TYPE if raw_type == DYNAMIC_TYPE else raw_type,
        display_name=DISPLAY_NAME_REMAPS.get(raw_name, raw_name).lower(),
    )


def parse_attribute_line(line: str) -> Attribute | None:
    match = _PROPERTY_RE.search(line)
    if match is None:
        return None
    raw_name, raw_type = match.groups()
    return normalize_attribute(raw_name, raw_type)


def scan_attribute_block(
    lines: Sequence[str], start: int, opener_line_number: int = 0
) -> BlockScan:
    """Collect attributes from lines[start:] up to the block terminator.

    Args:
        lines: Full input listing.
        start: Index of the first line after the block opener.
        opener_line_number: 1-based opener line, reported on failure.

    Returns:
        BlockScan with the attributes found and the number of lines consumed,
        terminator included.

    Raises:
        ExtractionError: UNTERMINATED_BLOCK when input ends before a line
            starting with "}".
    """
    attributes: list[Attribute] = []
    index = start
    while index < len(lines):
        line = lines[index]
        if line.startswith(BLOCK_TERMINATOR):
            return BlockScan(tuple(attributes), index - start + 1)
        attribute = parse_attribute_line(line)
        if attribute is not None:
            attributes.append(attribute)
        index += 1

    raise ExtractionError(
        "UNTERMINATED_BLOCK",
        "declaration block is never closed before end of input",
        opener_line_number,
    )


def extract_tags(lines: Sequence[str], html_only: bool = False) -> list[HtmlTag]:
    """Extract every recognized declaration block from a listing.

    Attributes are kept raw here: the className filter belongs to the
    resolver, and parents are not yet checked against known types.

    Args:
        lines: Input listing, one entry per line without line endings.
        html_only: Only recognize openers declaring HTML-prefixed names.

    Returns:
        HtmlTag list in declaration order.

    Raises:
        ExtractionError: On an unterminated block or an opener without a
            type name.
    """
    tags: list[HtmlTag] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        if not is_block_opener(line, html_only):
            index += 1
            continue

        line_number = index + 1
        name = parse_type_name(line, line_number)
        parents = parse_parents(line)
        if _INLINE_EMPTY_BLOCK_RE.search(line):
            scan = BlockScan((), 0)
        else:
            scan = scan_attribute_block(lines, index + 1, line_number)

        tags.append(
            HtmlTag(
                name=name,
                attributes=scan.attributes,
                parents=parents,
                line_number=line_number,
            )
        )
        index += 1 + scan.consumed

    return tags


# ===--- S2 Hierarchy resolution ---=== #

_CLOSURE_SAFETY_LIMIT = 100_000


@dataclass(frozen=True)
class PrunedRegistry:
    """Name-keyed tag registry whose parent edges all resolve.

    Only prune_unknown_parents builds one. The hierarchy queries below accept
    nothing else, so an unpruned mapping cannot reach them by accident.

    Attributes:
        tags: Tag name -> tag, in discovery order.
        dropped_parents: Tag name -> parent names removed by pruning. Only
            tags that lost at least one parent are listed.
    """

    tags: dict[str, HtmlTag]
    dropped_parents: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def __getitem__(self, name: str) -> HtmlTag:
        try:
            return self.tags[name]
        except KeyError:
            raise RegistryError(f"Type {name!r} is not in the registry") from None

    def __contains__(self, name: object) -> bool:
        return name in self.tags

    @property
    def pruned_count(self) -> int:
        return sum(len(names) for names in self.dropped_parents.values())


@dataclass(frozen=True)
class ResolveStats:
    """Diagnostics from a single resolve_tags run.

    Attributes:
        declared_count: Distinct declared type names.
        qualifying_count: Types descending from the root type.
        pruned_parent_count: Parent references dropped as unknown.
        inherited_attribute_count: Non-comment attributes added by closure.
    """

    declared_count: int
    qualifying_count: int
    pruned_parent_count: int
    inherited_attribute_count: int


def build_registry(tags: Iterable[HtmlTag]) -> dict[str, HtmlTag]:
    return {tag.name: tag for tag in tags}


def prune_unknown_parents(registry: dict[str, HtmlTag]) -> PrunedRegistry:
    """Drop parent references to types missing from registry.

    Unknown parents are expected (the listing references types declared
    elsewhere) and are never an error.

    Args:
        registry: Raw name -> tag map from build_registry.

    Returns:
        PrunedRegistry where every parent name is a registry key.
    """
    pruned: dict[str, HtmlTag] = {}
    dropped: dict[str, tuple[str, ...]] = {}
    for name, tag in registry.items():
        kept = tuple(parent for parent in tag.parents if parent in registry)
        missing = tuple(parent for parent in tag.parents if parent not in registry)
        if missing:
            dropped[name] = missing
        pruned[name] = replace(tag, parents=kept)
    return PrunedRegistry(tags=pruned, dropped_parents=dropped)


def _require_pruned(registry: object) -> PrunedRegistry:
    if not isinstance(registry, PrunedRegistry):
        raise TypeError(
            "Hierarchy queries need a PrunedRegistry; run prune_unknown_parents first "
            f"(got {type(registry).__name__})"
        )
    return registry


def is_root_descendant(
    name: str,
    registry: PrunedRegistry,
    root_type: str = DEFAULT_ROOT_TYPE,
) -> bool:
    """Return True if name is root_type or reaches it through its parents.

    Breadth-first over the pruned parent edges, starting at name itself.

    Args:
        name: Type name to test.
        registry: Pruned registry.
        root_type: Root marker type name.

    Returns:
        True on the first frontier entry equal to root_type, False once the
        frontier is exhausted.

    Raises:
        TypeError: If registry is not a PrunedRegistry.
        RegistryError: If the walk reaches a name absent from registry.
    """
    registry = _require_pruned(registry)
    frontier: deque[str] = deque([name])
    visited: set[str] = set()
    while frontier:
        current = frontier.popleft()
        if current == root_type:
            return True
        if current in visited:
            continue
        visited.add(current)
        frontier.extend(registry[current].parents)
    return False


def own_attributes(tag: HtmlTag) -> tuple[Attribute, ...]:
    return tuple(attr for attr in tag.attributes if attr.name != EXCLUDED_ATTRIBUTE)


def inherited_banner(ancestor_name: str) -> Attribute:
    return Attribute(
        name=f"// inherited attributes from supertype {ancestor_name}",
        source_type=COMMENT_TYPE,
        display_name="",
    )


def collect_inherited_attributes(
    tag: HtmlTag,
    registry: PrunedRegistry,
    root_type: str = DEFAULT_ROOT_TYPE,
) -> tuple[Attribute, ...]:
    """Flatten the attributes of tag's foreign ancestors, nearest first.

    Walks parents breadth-first in declaration order. Ancestors that descend
    from root_type are neither inlined nor expanded: they get their own
    section. Every other ancestor contributes a banner comment plus its own
    attributes (when it has any) and enqueues its parents. Ancestors reached
    along several branches contribute once per branch.

    Args:
        tag: Tag whose parents seed the walk.
        registry: Pruned registry.
        root_type: Root marker type name.

    Returns:
        Inherited attributes, banner comments included, in walk order.

    Raises:
        TypeError: If registry is not a PrunedRegistry.
        RegistryError: If the walk reaches a name absent from registry.
        RuntimeError: If the walk exceeds _CLOSURE_SAFETY_LIMIT steps, which
            only a parent cycle can cause.
    """
    registry = _require_pruned(registry)
    frontier: deque[str] = deque(tag.parents)
    inherited: list[Attribute] = []
    steps = 0
    while frontier:
        steps += 1
        if steps > _CLOSURE_SAFETY_LIMIT:
            raise RuntimeError(
                f"Attribute closure for {tag.name} exceeded safety limit of "
                f"{_CLOSURE_SAFETY_LIMIT} steps (cyclic parents?)"
            )

        ancestor_name = frontier.popleft()
        if is_root_descendant(ancestor_name, registry, root_type):
            continue

        ancestor = registry[ancestor_name]
        attributes = own_attributes(ancestor)
        if attributes:
            inherited.append(inherited_banner(ancestor.name))
            inherited.extend(attributes)
        frontier.extend(ancestor.parents)

    return tuple(inherited)


def resolve_tags(
    tags: Iterable[HtmlTag],
    root_type: str = DEFAULT_ROOT_TYPE,
) -> tuple[list[HtmlTag], ResolveStats]:
    """Select root descendants and give each its full attribute list.

    Args:
        tags: Raw tags from extract_tags.
        root_type: Root marker type name.

    Returns:
        Tuple of (qualifying tags in discovery order, ResolveStats). Each
        tag's attributes are its own minus className, followed by the
        inherited foreign-ancestor attributes.

    Raises:
        RuntimeError: Propagated from collect_inherited_attributes.
    """
    registry = prune_unknown_parents(build_registry(tags))

    resolved: list[HtmlTag] = []
    inherited_count = 0
    for tag in registry.tags.values():
        if not is_root_descendant(tag.name, registry, root_type):
            continue
        inherited = collect_inherited_attributes(tag, registry, root_type)
        inherited_count += sum(
            1 for attr in inherited if attr.kind is not AttributeKind.COMMENT
        )
        resolved.append(replace(tag, attributes=own_attributes(tag) + inherited))

    stats = ResolveStats(
        declared_count=len(registry.tags),
        qualifying_count=len(resolved),
        pruned_parent_count=registry.pruned_count,
        inherited_attribute_count=inherited_count,
    )
    return resolved, stats


# ===--- S3 Emission ---=== #


def select_shape(tag_name: str, attr_name: str) -> BindingShape:
    if (tag_name, attr_name) in SPECIAL_DOM_API_ATTRIBUTES:
        return BindingShape.SPECIAL_DOM
    return BindingShape.DEFAULT


def _default_property_name(attr_name: str) -> str:
    return f"default{attr_name[:1].upper()}{attr_name[1:]}"


def _plain_default_lines(tag: HtmlTag, attr: Attribute) -> list[str]:
    receiver = f"fun Tag<{tag.name}>.{attr.name}"
    return [
        f'{receiver}(value: {attr.source_type}) = attr("{attr.display_name}", value)',
        f'{receiver}(value: Flow<{attr.source_type}>) = attr("{attr.display_name}", value)',
        "",
    ]


def _boolean_default_lines(tag: HtmlTag, attr: Attribute) -> list[str]:
    receiver = f"fun Tag<{tag.name}>.{attr.name}"
    call = f'attr("{attr.display_name}", value, trueValue)'
    return [
        f'{receiver}(value: {attr.source_type}, trueValue: String = "") = {call}',
        f'{receiver}(value: Flow<{attr.source_type}>, trueValue: String = "") = {call}',
        "",
    ]


def _plain_special_lines(tag: HtmlTag, attr: Attribute) -> list[str]:
    receiver = f"fun Tag<{tag.name}>.{attr.name}"
    return [
        f"{receiver}(value: {attr.source_type}) {{",
        f"    domNode.{attr.name} = value",
        f"    domNode.{_default_property_name(attr.name)} = value",
        f'    domNode.setAttribute("{attr.display_name}", {attr.value_as_string})',
        "}",
        "",
        f"{receiver}(value: Flow<{attr.source_type}>) {{",
        f"    mountSimple(job, value) {{ v -> {attr.name}(v) }}",
        "}",
        "",
    ]


def _boolean_special_lines(tag: HtmlTag, attr: Attribute) -> list[str]:
    receiver = f"fun Tag<{tag.name}>.{attr.name}"
    return [
        f'{receiver}(value: {attr.source_type}, trueValue: String = "") {{',
        f"    domNode.{attr.name} = value",
        f"    domNode.{_default_property_name(attr.name)} = value",
        f'    if (value) domNode.setAttribute("{attr.display_name}", trueValue)',
        f'    else domNode.removeAttribute("{attr.display_name}")',
        "}",
        "",
        f'{receiver}(value: Flow<{attr.source_type}>, trueValue: String = "") {{',
        f"    mountSimple(job, value) {{ v -> {attr.name}(v, trueValue) }}",
        "}",
        "",
    ]


ACCESSOR_TEMPLATES: dict[
    tuple[AttributeKind, BindingShape], Callable[[HtmlTag, Attribute], list[str]]
] = {
    (AttributeKind.PLAIN, BindingShape.DEFAULT): _plain_default_lines,
    (AttributeKind.PLAIN, BindingShape.SPECIAL_DOM): _plain_special_lines,
    (AttributeKind.BOOLEAN, BindingShape.DEFAULT): _boolean_default_lines,
    (AttributeKind.BOOLEAN, BindingShape.SPECIAL_DOM): _boolean_special_lines,
}


def generate_attribute_lines(tag: HtmlTag, attr: Attribute) -> list[str]:
    """Return the generated lines for one attribute of tag.

    Comment attributes are echoed verbatim. Every other attribute yields a
    scalar and a Flow overload whose code shape depends on its kind and on
    whether (tag, attribute) is allow-listed for direct DOM binding.
    """
    if attr.kind is AttributeKind.COMMENT:
        return [attr.name]
    template = ACCESSOR_TEMPLATES[(attr.kind, select_shape(tag.name, attr.name))]
    return template(tag, attr)


def generate_tag_section(tag: HtmlTag) -> list[str]:
    lines = ["", "/*", f" * {tag.name} attributes", " */"]
    for attr in tag.attributes:
        lines.extend(generate_attribute_lines(tag, attr))
    return lines


FILE_HEADER: tuple[str, ...] = (
    "/*",
    " * Generated by tag-attributes-gen",
    " * Pay attention to local modifications before pasting an updated output here!",
    " * Add manual extensions above this section (like the SVG attributes).",
    " */",
)


def format_file_header() -> list[str]:
    return list(FILE_HEADER)


def emittable_tags(tags: Iterable[HtmlTag]) -> list[HtmlTag]:
    return [tag for tag in tags if tag.attributes]


def emit(tags: Iterable[HtmlTag]) -> str:
    """Render resolved tags to the generated Kotlin source text.

    Tags without attributes produce no section. Sections keep input order.

    Args:
        tags: Resolved tags from resolve_tags.

    Returns:
        Complete source string with the header banner and one trailing newline.
    """
    lines = format_file_header()
    for tag in emittable_tags(tags):
        lines.extend(generate_tag_section(tag))
    return "\n".join(lines) + "\n"


# ===--- S4 Pipeline ---=== #


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one run_generate call.

    Attributes:
        text: Generated source text, exactly as written.
        section_count: Number of emitted tag sections.
        stats: Resolution diagnostics.
    """

    text: str
    section_count: int
    stats: ResolveStats

    @property
    def line_count(self) -> int:
        return self.text.count("\n")


def read_input_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


def write_output(text: str, output_path: Path | None) -> None:
    """Write generated text to output_path, or to stdout when it is None.

    Creates missing parent directories of output_path.

    Raises:
        OSError: Propagated directly if the filesystem write fails.
    """
    if output_path is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")


def run_generate(config: GenerateConfig) -> GenerationResult:
    """Execute the complete generation pipeline for a GenerateConfig.

    Runs read -> extract -> resolve -> emit -> write in order. Progress goes to
    stderr so stdout can carry the generated source.

    Args:
        config: Validated GenerateConfig from build_config.

    Returns:
        GenerationResult describing the generated text.

    Raises:
        OSError: Input not readable or output not writable.
        ExtractionError: Malformed declaration block in the input.
        RuntimeError: Safety limit exceeded in the attribute closure.
    """
    print(f"Parsing: {config.input_path}", file=sys.stderr)
    lines = read_input_lines(config.input_path)

    tags = extract_tags(lines, html_only=config.html_only)
    print(f"  Extracted: {len(tags)} declarations", file=sys.stderr)

    resolved, stats = resolve_tags(tags, root_type=config.root_type)
    print(
        f"  Resolved: {stats.qualifying_count} qualifying types "
        f"({stats.pruned_parent_count} unknown parent references pruned)",
        file=sys.stderr,
    )

    text = emit(resolved)
    result = GenerationResult(
        text=text,
        section_count=len(emittable_tags(resolved)),
        stats=stats,
    )
    print(
        f"  Emitted: {result.section_count} sections, {result.line_count} lines",
        file=sys.stderr,
    )

    write_output(text, config.output_path)

    print_generation_summary(build_generation_summary(config, result))
    return result


# ===--- S5 Summary report ---=== #


@dataclass(frozen=True)
class GenerationSummary:
    """Complete, immutable data for the post-generation report.

    Attributes:
        input_label: Input listing path as string.
        output_label: Output path as string, or "<stdout>".
        root_type: Root marker type used for the run.
        stats: Resolution diagnostics.
        section_count: Number of emitted tag sections.
        line_count: Lines in the generated text.
    """

    input_label: str
    output_label: str
    root_type: str
    stats: ResolveStats
    section_count: int
    line_count: int


def build_generation_summary(
    config: GenerateConfig, result: GenerationResult
) -> GenerationSummary:
    return GenerationSummary(
        input_label=str(config.input_path),
        output_label=(
            str(config.output_path) if config.output_path is not None else "<stdout>"
        ),
        root_type=config.root_type,
        stats=result.stats,
        section_count=result.section_count,
        line_count=result.line_count,
    )


def format_generation_summary(summary: GenerationSummary) -> str:
    """Render a GenerationSummary to the multi-section console string.

    Line counts use thousands separators. Returns a string with exactly one
    trailing newline.
    """
    lines: list[str] = []
    lines.append("Tag attribute accessors generated:")
    lines.append("")
    lines.append(f"  Input:      {summary.input_label}")
    lines.append(f"  Output:     {summary.output_label}")
    lines.append(f"  Root type:  {summary.root_type}")
    lines.append("")
    lines.append(f"  {'Declarations:':<18}{summary.stats.declared_count:>6}")
    lines.append(f"  {'Qualifying:':<18}{summary.stats.qualifying_count:>6}")
    lines.append(f"  {'Emitted sections:':<18}{summary.section_count:>6}")
    lines.append(f"  {'Pruned parents:':<18}{summary.stats.pruned_parent_count:>6}")
    lines.append(
        f"  {'Inherited attrs:':<18}{summary.stats.inherited_attribute_count:>6}"
    )
    lines.append("")
    lines.append(f"  Total: {summary.line_count:,} lines")
    lines.append("")

    return "\n".join(lines)


def print_generation_summary(summary: GenerationSummary) -> None:
    print(format_generation_summary(summary), end="", file=sys.stderr)


# ===--- Main generation ---=== #


def main(argv: list[str] | None = None) -> None:
    try:
        config = build_config(argv)
    except ConfigError as err:
        print(f"Config error [{err.code}]: {err.message}", file=sys.stderr)
        if err.suggestion:
            print(f"Hint: {err.suggestion}", file=sys.stderr)
        raise SystemExit(1) from err

    try:
        run_generate(config)
    except ExtractionError as err:
        print(f"Input error [{err.code}]: {err}", file=sys.stderr)
        raise SystemExit(1) from err
    except OSError as err:
        print(f"Error: {err}", file=sys.stderr)
        raise SystemExit(1) from err
    except (RuntimeError, ValueError) as err:
        print(f"Internal error: {err}", file=sys.stderr)
        raise SystemExit(1) from err


if __name__ == "__main__":
    main()
