"""Tests for the paginated table layout engine."""

from decimal import Decimal

import pytest

from statement_generator.application.statements.layout_engine import TableLayoutEngine
from statement_generator.application.statements.page_instructions import (
    AdvancePage,
    LayoutCanvas,
    PlaceImage,
    PlaceText,
    StrokeLine,
    StrokeRect,
    TextStyle,
)
from statement_generator.application.statements.templates import FooterBlock, TableRow, TemplateRegistry
from statement_generator.application.statements.templates.pnb_template import PNBTemplate
from statement_generator.core.exceptions import MeasurementFailureError, RowOverflowError
from statement_generator.core.unified_config import A4_HEIGHT, A4_WIDTH
from statement_generator.domain.statements.models import AccountProfile
from statement_generator.domain.statements.services import (
    FieldResolver,
    SchemaRegistry,
    compute_ledger,
    summarize_ledger,
)

from tests.helpers import make_rows, split_pages


def _ledger(bank_id, rows, opening=Decimal("0")):
    schema = SchemaRegistry.schema_for(bank_id)
    ledger = compute_ledger(FieldResolver().resolve_all(schema, rows), opening)
    return ledger, summarize_ledger(ledger, opening)


def _layout(engine, bank_id, rows, account=None):
    template = TemplateRegistry.get_template(bank_id)
    schema = SchemaRegistry.schema_for(bank_id)
    ledger, totals = _ledger(bank_id, rows)
    return template, engine.layout(template, AccountProfile.for_schema(schema, account or {}), ledger, totals)


@pytest.fixture
def engine(measurer):
    return TableLayoutEngine(measurer)


def test_single_page_statement(engine, account):
    template, result = _layout(engine, "PNB", make_rows(3), account)

    assert result.page_count == 1
    assert result.stream.page_count == 1
    assert len(result.entry_rows()) == 3
    assert not any(isinstance(item, AdvancePage) for item in result.stream)
    texts = result.stream.texts()
    assert "Account Statement For Account:0123456789012" in texts
    assert "250.50" in texts


@pytest.mark.parametrize("bank_id", ["PNB", "ICICI", "HDFC", "BANDHAN"])
def test_no_row_extends_past_the_bottom_margin(engine, account, bank_id):
    template, result = _layout(engine, bank_id, make_rows(150), account)
    limit = A4_HEIGHT - template.page_policy.bottom_margin

    assert result.page_count > 1
    for row in result.rows:
        assert row.bottom <= limit


@pytest.mark.parametrize("bank_id", ["PNB", "CENTRAL", "SBI", "AXIS", "IDFC"])
def test_continuation_rows_start_at_the_offset(engine, account, bank_id):
    template, result = _layout(engine, bank_id, make_rows(150), account)

    first_on_page = {}
    for row in result.rows:
        first_on_page.setdefault(row.page, row)

    for page, row in first_on_page.items():
        if page > 1:
            assert row.y == template.page_policy.continuation_offset


def test_rows_are_stacked_without_gaps(engine, account):
    _, result = _layout(engine, "SBI", make_rows(40), account)

    for previous, current in zip(result.rows, result.rows[1:]):
        if previous.page == current.page:
            assert current.y == pytest.approx(previous.bottom)


def test_entry_positions_are_in_ledger_order(engine, account):
    _, result = _layout(engine, "AXIS", make_rows(60), account)

    assert [row.position for row in result.entry_rows()] == list(range(1, 61))
    # AXIS adds opening, transaction total and closing balance rows
    assert len(result.rows) == 63
    assert result.rows[0].position is None


def test_page_breaks_match_stream(engine, account):
    _, result = _layout(engine, "ICICI", make_rows(120), account)

    breaks = sum(1 for item in result.stream if isinstance(item, AdvancePage))
    assert breaks == result.page_count - 1
    assert len(split_pages(result.stream)) == result.page_count


def _has_table_header_above(page, template):
    y = template.page_policy.continuation_offset - template.header_row_height
    return any(
        isinstance(item, StrokeRect) and item.y == y and item.height == template.header_row_height
        for item in page
    )


def test_table_header_repeats_when_the_template_asks(engine, account):
    template, result = _layout(engine, "ICICI", make_rows(120), account)

    pages = split_pages(result.stream)
    assert template.page_policy.repeat_table_header
    for page in pages[1:result.rows[-1].page]:
        assert _has_table_header_above(page, template)


def test_table_header_not_repeated_for_pnb(engine, account):
    template, result = _layout(engine, "PNB", make_rows(120), account)

    pages = split_pages(result.stream)
    assert not template.page_policy.repeat_table_header
    for page in pages[1:result.rows[-1].page]:
        assert not _has_table_header_above(page, template)
        # the title line is repeated instead
        assert any(isinstance(item, PlaceText) and item.text.startswith("Account Statement For") for item in page)


def test_headings_follow_the_table_when_the_header_region_fills_page_one(engine):
    schema = SchemaRegistry.schema_for("PNB")
    long_account = {name: "long value " * 60 for name in schema.account_fields}
    template, result = _layout(engine, "PNB", make_rows(3), long_account)

    policy = template.page_policy
    heading_pages = [
        (page_number, item.y)
        for page_number, page in enumerate(split_pages(result.stream), start=1)
        for item in page
        if isinstance(item, PlaceText) and item.text == "Withdrawal"
    ]
    first_row = result.rows[0]

    assert first_row.page == 2
    assert first_row.y == policy.continuation_offset
    assert len(heading_pages) == 1
    page_number, heading_y = heading_pages[0]
    assert page_number == first_row.page
    assert policy.continuation_offset - template.header_row_height <= heading_y < first_row.y


def test_page_numbers_use_final_page_count(engine, account):
    _, result = _layout(engine, "ICICI", make_rows(120), account)
    count = result.page_count

    texts = result.stream.texts()
    for number in range(1, count + 1):
        assert f"Page {number} of {count}" in texts


def test_footer_is_on_the_last_page_only(engine, account):
    _, result = _layout(engine, "SBI", make_rows(80), account)

    pages = split_pages(result.stream)
    last_row_page = result.rows[-1].page
    for index, page in enumerate(pages, start=1):
        has_marker = any(isinstance(item, PlaceText) and item.text == "*** End of Statement ***" for item in page)
        assert has_marker == (index == len(pages))
    assert len(pages) >= last_row_page


def test_footer_legends_follow_the_table(engine, account):
    # ICICI closes with 29 numbered legends
    _, result = _layout(engine, "ICICI", make_rows(30), account)

    texts = result.stream.texts()
    assert "Legends Used in Account Statement" in texts
    pages = split_pages(result.stream)
    last = pages[-1]
    assert any(isinstance(item, PlaceText) and item.text.startswith("29.") for item in last)


def test_rows_have_frame_and_column_rules(engine, account):
    template, result = _layout(engine, "PNB", make_rows(1), account)
    row = result.rows[0]
    columns = len(template.geometry.columns)

    frames = [item for item in result.stream
              if isinstance(item, StrokeRect) and item.y == row.y and item.height == row.height]
    rules = [item for item in result.stream
             if isinstance(item, StrokeLine) and item.y1 == row.y and item.y2 == row.bottom]
    assert len(frames) == 1
    assert len(rules) == columns - 1


def test_monetary_columns_are_right_aligned(engine, account):
    _, result = _layout(engine, "PNB", make_rows(1), account)

    amount = next(item for item in result.stream if isinstance(item, PlaceText) and item.text == "250.50")
    assert amount.align == "right"


def test_row_height_grows_with_text_length(engine, measurer):
    template = TemplateRegistry.get_template("PNB")
    canvas = LayoutCanvas(measurer, A4_WIDTH, A4_HEIGHT)

    heights = [
        engine.row_height(template, canvas, TableRow(cells={"description": "x" * length}))
        for length in (0, 10, 50, 100, 200, 400, 800)
    ]

    assert heights == sorted(heights)
    assert heights[0] == template.min_row_height
    assert heights[-1] > heights[0]


def test_row_height_uses_the_tallest_cell(engine, measurer):
    template = TemplateRegistry.get_template("HDFC")
    canvas = LayoutCanvas(measurer, A4_WIDTH, A4_HEIGHT)

    short = engine.row_height(template, canvas, TableRow(cells={"description": "a", "ref_no": "b"}))
    tall = engine.row_height(template, canvas, TableRow(cells={"description": "a", "ref_no": "b" * 300}))

    assert tall > short


def test_row_taller_than_a_page_is_fatal(engine, account):
    rows = [{"narration": "word " * 4000, "deposit": "1"}]

    with pytest.raises(RowOverflowError) as exc_info:
        _layout(engine, "PNB", rows, account)

    assert exc_info.value.position == 1
    assert isinstance(exc_info.value, MeasurementFailureError)


def test_missing_branding_asset_falls_back_to_text(engine, account):
    _, result = _layout(engine, "ICICI", make_rows(2), account)

    assert not any(isinstance(item, PlaceImage) for item in result.stream)
    assert "ICICI Bank" in result.stream.texts()


def test_branding_image_carries_its_fallback(measurer, account):
    requested = []

    def locator(name):
        requested.append(name)
        return f"/assets/{name.lower()}.png"

    engine = TableLayoutEngine(measurer, asset_locator=locator)
    _, result = _layout(engine, "CENTRAL", make_rows(2), account)

    images = [item for item in result.stream if isinstance(item, PlaceImage)]
    assert images
    assert images[0].path == "/assets/central.png"
    assert images[0].fallback
    assert requested[0] == "CENTRAL"
    assert "CENTRAL TO YOU SINCE 1911" not in result.stream.texts()


def test_empty_ledger_still_renders_header_and_footer(engine, account):
    _, result = _layout(engine, "SBI", [], account)

    assert result.page_count == 1
    assert result.rows == ()
    assert "*** End of Statement ***" in result.stream.texts()


def test_every_bank_lays_out(engine, account):
    for bank_id in TemplateRegistry.get_supported_banks():
        _, result = _layout(engine, bank_id, make_rows(70), account)
        assert result.page_count >= 2, bank_id
        assert len(result.entry_rows()) == 70, bank_id


class TallFooterTemplate(PNBTemplate):
    """PNB layout whose footer cannot fit on one page."""

    def footer_blocks(self, canvas, ctx):
        def draw(target, y):
            target.text(40, y, "FOOTER BLOCK", TextStyle("Helvetica", 8))

        return [FooterBlock(height=300, draw=draw) for _ in range(5)]


def test_footer_overflow_continues_on_new_pages(engine, account):
    template = TallFooterTemplate()
    ledger, totals = _ledger("PNB", make_rows(10))
    result = engine.layout(template, AccountProfile(account), ledger, totals)

    policy = template.page_policy
    limit = A4_HEIGHT - policy.footer_bottom_margin
    blocks = []
    for page_number, page in enumerate(split_pages(result.stream), start=1):
        blocks.extend((page_number, item.y) for item in page
                      if isinstance(item, PlaceText) and item.text == "FOOTER BLOCK")

    assert len(blocks) == 5
    assert result.page_count > result.rows[-1].page
    for page_number, y in blocks:
        assert y + 300 <= limit or y == policy.footer_continuation_offset
    continuation_starts = {}
    for page_number, y in blocks:
        continuation_starts.setdefault(page_number, y)
    for page_number, y in continuation_starts.items():
        if page_number > result.rows[-1].page:
            assert y == policy.footer_continuation_offset
    assert f"Page No {result.page_count}" in result.stream.texts()


@pytest.mark.parametrize("bank_id", TemplateRegistry.get_supported_banks())
def test_templates_fit_an_a4_page(bank_id):
    template = TemplateRegistry.get_template(bank_id)
    policy = template.page_policy

    assert template.geometry.right <= A4_WIDTH
    assert policy.continuation_offset - template.header_row_height >= 0
    assert policy.continuation_offset < A4_HEIGHT - policy.bottom_margin
