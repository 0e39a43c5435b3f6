from __future__ import annotations

import re

import pytest

from drivelisting.adapters.drive.markup import (
    BLOCK_END_MARKER,
    BLOCK_START_MARKER,
    build_membership_index,
    extract_ids,
    locate_data_block,
    parse_title,
)
from tests.support.drive import drive_ivd_script, folder_page

_VALID_ID = re.compile(r"[A-Za-z0-9_-]+")


def _span(body: str) -> str:
    return f"{BLOCK_START_MARKER}{body}{BLOCK_END_MARKER}"


def test_locate_data_block_picks_largest_span() -> None:
    markup = "<p>" + _span("a") + "<p>" + _span("b" * 50) + "<p>" + _span("c" * 10) + "<p>tail"

    block = locate_data_block(markup)

    assert block is not None
    assert block.text == _span("b" * 50)
    assert markup[block.start : block.end] == block.text
    assert markup[block.tail_start :] == "<p>" + _span("c" * 10) + "<p>tail"


def test_locate_data_block_no_other_pair_is_longer() -> None:
    bodies = ["x" * n for n in (3, 17, 8, 17, 1)]
    markup = "|".join(_span(body) for body in bodies)

    block = locate_data_block(markup)

    assert block is not None
    longest = max(len(_span(body)) for body in bodies)
    assert block.end - block.start == longest
    # ties go to the earliest pair
    assert block.start == markup.index(_span("x" * 17))


def test_locate_data_block_pairs_each_start_with_nearest_end() -> None:
    # Both starts share the single end marker; the first start spans further.
    markup = f"{BLOCK_START_MARKER} one {BLOCK_START_MARKER} two {BLOCK_END_MARKER}"

    block = locate_data_block(markup)

    assert block is not None
    assert block.start == 0
    assert block.end == len(markup)


@pytest.mark.parametrize(
    "markup",
    [
        "<html><body>no markers here</body></html>",
        f"<script>{BLOCK_START_MARKER} never closed</script>",
        f"{BLOCK_END_MARKER} {BLOCK_START_MARKER}",
    ],
)
def test_locate_data_block_returns_none_without_marker_pair(markup: str) -> None:
    assert locate_data_block(markup) is None


def test_extract_ids_filters_noise_and_keeps_first_seen_order() -> None:
    fragment = (
        '<div data-id="1BbbbbbbbbbbbbbbbbbbbbbbB"></div>'
        '<div data-id="short"></div>'
        '<div data-id="1Aaaaaaaaaaaaaaaaaaaaaaa_-"></div>'
        '<div data-id="has.dots.and.is.long.enough.to.pass"></div>'
        '<div data-id="1BbbbbbbbbbbbbbbbbbbbbbbB"></div>'
        '<div data-id="exactly-twenty-chars"></div>'
        '<div data-id="nineteen-characters"></div>'
    )

    ids = extract_ids(fragment)

    assert ids == [
        "1BbbbbbbbbbbbbbbbbbbbbbbB",
        "1Aaaaaaaaaaaaaaaaaaaaaaa_-",
        "exactly-twenty-chars",
    ]
    assert all(len(value) >= 20 and _VALID_ID.fullmatch(value) for value in ids)


def test_extract_ids_ignores_other_attributes() -> None:
    assert extract_ids('<a data-target="1Aaaaaaaaaaaaaaaaaaaaaaaaa">x</a>') == []


def test_build_membership_index_collects_folder_names_only() -> None:
    markup = drive_ivd_script(
        folder_names=["Photos", "  Padded  ", "Backups, 0BinternalId"],
        file_names=["report.pdf"],
    )

    assert build_membership_index(markup) == {"Photos", "Padded", "Backups"}


def test_build_membership_index_without_assignment_is_empty() -> None:
    assert build_membership_index("<html><script>var x = 1;</script></html>") == frozenset()


def test_build_membership_index_reads_folder_page() -> None:
    markup = folder_page(block_ids=["1Aaaaaaaaaaaaaaaaaaaaaaaa"], folder_names=["Photos"])

    assert build_membership_index(markup) == {"Photos"}


def test_build_membership_index_keeps_leading_comma_names() -> None:
    markup = drive_ivd_script(folder_names=[",odd"])

    assert build_membership_index(markup) == {",odd"}


def test_parse_title_prefers_og_title() -> None:
    markup = (
        '<meta property="og:title" content="Holiday.mov - Google Drive">'
        "<title>Something else - Google Drive</title>"
    )

    assert parse_title(markup) == "Holiday.mov"


def test_parse_title_falls_back_to_title_element() -> None:
    assert parse_title('<title lang="en">  Budget 2024 - Google Drive </title>') == "Budget 2024"


def test_parse_title_unescapes_entities() -> None:
    markup = '<meta property="og:title" content="Tom &amp; Jerry - Google Drive">'

    assert parse_title(markup) == "Tom & Jerry"


@pytest.mark.parametrize(
    "markup",
    [
        "<html><body>nothing</body></html>",
        "<title> - Google Drive</title>",
        '<meta property="og:title" content=" - Google Drive"><title>   </title>',
    ],
)
def test_parse_title_returns_none_when_missing(markup: str) -> None:
    assert parse_title(markup) is None
