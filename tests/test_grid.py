"""Tests for the grid compositor."""

import xml.etree.ElementTree as ET

import pytest

from readme_icons.catalog import Icon, IconCatalog
from readme_icons.grid import (
    GridError,
    LayoutRequest,
    Theme,
    canvas_size,
    cell_origin,
    composite,
    resolve_icons,
)

NS = "{http://www.w3.org/2000/svg}"

CATALOG = IconCatalog({
    "python": Icon("python", "Python", "3776AB", "M0 0h24v24H0z"),
    "react": Icon("react", "React", "61DAFB", "M12 0a12 12 0 1 0 0 24"),
    "docker": Icon("docker", "Docker", "2496ED", "M1 1h22v22H1z"),
    "c&c": Icon("c&c", "C&C <3", "000000", "M2 2h20v20H2z"),
})


def _parse(svg: str) -> ET.Element:
    return ET.fromstring(svg)


class TestLayoutRequest:
    def test_defaults(self) -> None:
        req = LayoutRequest.from_query("python")
        assert req.per_line == 15
        assert req.size == 48
        assert req.theme is Theme.DARK

    def test_size_clamped_high(self) -> None:
        assert LayoutRequest.from_query("python", size="9999").size == 128

    def test_size_clamped_low(self) -> None:
        assert LayoutRequest.from_query("python", size="1").size == 16

    def test_perline_zero_becomes_one(self) -> None:
        assert LayoutRequest.from_query("python", perline="0").per_line == 1

    def test_perline_clamped_high(self) -> None:
        assert LayoutRequest.from_query("python", perline="500").per_line == 50

    def test_negative_perline_clamped(self) -> None:
        assert LayoutRequest.from_query("python", perline="-3").per_line == 1

    def test_garbage_numbers_use_defaults(self) -> None:
        req = LayoutRequest.from_query("python", perline="abc", size="")
        assert req.per_line == 15
        assert req.size == 48

    def test_leading_digits_parsed(self) -> None:
        assert LayoutRequest.from_query("python", size="64px").size == 64

    def test_only_exact_light_selects_light(self) -> None:
        assert LayoutRequest.from_query("python", t="light").theme is Theme.LIGHT
        assert LayoutRequest.from_query("python", t="LIGHT").theme is Theme.DARK
        assert LayoutRequest.from_query("python", t="dark").theme is Theme.DARK
        assert LayoutRequest.from_query("python", t="anything").theme is Theme.DARK

    def test_direct_construction_clamps(self) -> None:
        req = LayoutRequest(identifiers=["python"], theme="light", per_line=99, size=4)
        assert req.identifiers == ("python",)
        assert req.theme is Theme.LIGHT
        assert req.per_line == 50
        assert req.size == 16


class TestResolveIcons:
    def test_case_insensitive_and_trimmed(self) -> None:
        icons = resolve_icons([" Python ", "REACT"], CATALOG)
        assert [i.slug for i in icons] == ["python", "react"]

    def test_unknown_dropped_order_kept(self) -> None:
        icons = resolve_icons(["docker", "nope", "python"], CATALOG)
        assert [i.slug for i in icons] == ["docker", "python"]

    def test_duplicates_kept(self) -> None:
        icons = resolve_icons(["python", "python"], CATALOG)
        assert len(icons) == 2


class TestGeometry:
    def test_row_major_placement(self) -> None:
        # 3 per row: index 3 starts the second row
        x, y = cell_origin(3, per_line=3, size=48)
        assert x == pytest.approx(0)
        assert y == pytest.approx(48 + 48 * 0.2)

    def test_column_offset(self) -> None:
        x, y = cell_origin(2, per_line=3, size=48)
        assert x == pytest.approx(2 * 57.6)
        assert y == 0

    def test_canvas_uses_min_of_count_and_perline(self) -> None:
        width, height = canvas_size(5, per_line=3, size=48)
        assert width == pytest.approx(3 * 48 + 2 * 9.6)
        assert height == pytest.approx(2 * 48 + 9.6)

    def test_canvas_narrower_than_configured_row(self) -> None:
        width, height = canvas_size(2, per_line=15, size=48)
        assert width == pytest.approx(2 * 48 + 9.6)
        assert height == 48

    def test_single_icon_has_no_gap(self) -> None:
        assert canvas_size(1, per_line=15, size=32) == (32, 32)


class TestComposite:
    def test_missing_input(self) -> None:
        for raw in ("", None):
            result = composite(LayoutRequest.from_query(raw), CATALOG)
            assert not result.ok
            assert result.error is GridError.MISSING_INPUT
            assert result.svg is None

    def test_no_valid_icons(self) -> None:
        result = composite(LayoutRequest.from_query("not-a-real-icon"), CATALOG)
        assert result.error is GridError.NO_VALID_ICONS

    def test_error_status_codes(self) -> None:
        assert GridError.MISSING_INPUT.status_code == 400
        assert GridError.NO_VALID_ICONS.status_code == 404
        assert GridError.MISSING_INPUT.message == 'Missing "i" parameter'

    def test_deterministic(self) -> None:
        req = LayoutRequest.from_query("python,react,docker", perline="2", size="40")
        assert composite(req, CATALOG).svg == composite(req, CATALOG).svg

    def test_valid_svg_with_one_group_per_icon(self) -> None:
        result = composite(LayoutRequest.from_query("python,react,nope,docker"), CATALOG)
        root = _parse(result.svg)
        assert root.tag == f"{NS}svg"
        assert len(root.findall(f"{NS}g")) == 3

    def test_root_dimensions(self) -> None:
        result = composite(LayoutRequest.from_query("python,react,docker,python,react", perline="3"), CATALOG)
        root = _parse(result.svg)
        assert root.get("width") == "163.2"
        assert root.get("height") == "105.6"
        assert root.get("viewBox") == "0 0 163.2 105.6"

    def test_cell_geometry_at_default_size(self) -> None:
        result = composite(LayoutRequest.from_query("python"), CATALOG)
        group = _parse(result.svg).find(f"{NS}g")
        rect = group.find(f"{NS}rect")
        path = group.find(f"{NS}path")
        assert group.get("transform") == "translate(0, 0)"
        assert rect.get("width") == "48"
        assert rect.get("rx") == "9.6"
        # padding 12 on each side leaves 24px: native scale
        assert path.get("transform") == "translate(12, 12) scale(1)"
        assert path.get("d") == "M0 0h24v24H0z"

    def test_second_row_translation(self) -> None:
        result = composite(LayoutRequest.from_query("python,react,docker", perline="2"), CATALOG)
        groups = _parse(result.svg).findall(f"{NS}g")
        assert groups[2].get("transform") == "translate(0, 57.6)"

    def test_dark_theme_colors(self) -> None:
        result = composite(LayoutRequest.from_query("python"), CATALOG)
        group = _parse(result.svg).find(f"{NS}g")
        assert group.find(f"{NS}rect").get("fill") == "#3776AB"
        assert group.find(f"{NS}path").get("fill") == "white"

    def test_light_theme_swaps_colors(self) -> None:
        result = composite(LayoutRequest.from_query("python", t="light"), CATALOG)
        group = _parse(result.svg).find(f"{NS}g")
        assert group.find(f"{NS}rect").get("fill") == "white"
        assert group.find(f"{NS}path").get("fill") == "#3776AB"

    def test_title_escaped(self) -> None:
        result = composite(LayoutRequest.from_query("c&c"), CATALOG)
        assert "C&amp;C &lt;3" in result.svg
        assert _parse(result.svg).find(f"{NS}g/{NS}title").text == "C&C <3"

    def test_result_carries_icons_and_size(self) -> None:
        result = composite(LayoutRequest.from_query("python,react"), CATALOG)
        assert [i.slug for i in result.icons] == ["python", "react"]
        assert result.width == pytest.approx(105.6)
        assert result.height == 48
