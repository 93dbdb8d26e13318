import argparse
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

GENERATOR_DIR = Path(__file__).resolve().parent.parent
if str(GENERATOR_DIR) not in sys.path:
    sys.path.insert(0, str(GENERATOR_DIR))

import attrgen  # noqa: E402

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixture_listing() -> Path:
    return FIXTURES_DIR / "dom_minimal.kt"


@pytest.fixture
def write_listing(tmp_path: Path) -> Callable[[str], Path]:
    def _write_listing(text: str, name: str = "dom.kt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write_listing


@pytest.fixture
def make_args(fixture_listing: Path) -> Callable[..., argparse.Namespace]:
    def _make_args(**overrides: object) -> argparse.Namespace:
        base_args: dict[str, object] = {
            "input": fixture_listing,
            "output": None,
            "root_type": attrgen.DEFAULT_ROOT_TYPE,
            "html_only": False,
        }
        base_args.update(overrides)
        return argparse.Namespace(**base_args)

    return _make_args


@pytest.fixture
def make_attribute() -> Callable[..., attrgen.Attribute]:
    def _make_attribute(
        name: str,
        source_type: str = "String",
        display_name: str | None = None,
    ) -> attrgen.Attribute:
        return attrgen.Attribute(
            name=name,
            source_type=source_type,
            display_name=name.lower() if display_name is None else display_name,
        )

    return _make_attribute


@pytest.fixture
def make_tag(
    make_attribute: Callable[..., attrgen.Attribute],
) -> Callable[..., attrgen.HtmlTag]:
    def _make_tag(
        name: str,
        attributes: tuple[str | attrgen.Attribute, ...] = (),
        parents: tuple[str, ...] = (),
    ) -> attrgen.HtmlTag:
        return attrgen.HtmlTag(
            name=name,
            attributes=tuple(
                make_attribute(attr) if isinstance(attr, str) else attr
                for attr in attributes
            ),
            parents=parents,
        )

    return _make_tag
