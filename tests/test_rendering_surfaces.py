"""Tests for rendering surfaces and text measurement."""

import pytest

from statement_generator.application.statements.generate_statement import GenerateStatementUseCase
from statement_generator.application.statements.page_instructions import (
    AdvancePage,
    FillRect,
    PlaceImage,
    PlaceText,
    StrokeLine,
    StrokeRect,
)
from statement_generator.application.statements.templates import TemplateRegistry
from statement_generator.application.statements.text_measurement import ReportLabTextMeasurer
from statement_generator.core.exceptions import MeasurementFailureError
from statement_generator.infrastructure.rendering import AssetStore, RecordingSurface, ReportLabSurface

from tests.helpers import make_rows

SAMPLE = [
    PlaceText(40, 40, "Statement of Account", "Helvetica-Bold", 12),
    PlaceText(300, 60, "right", align="right"),
    PlaceText(300, 80, "centre", align="center"),
    StrokeRect(40, 100, 200, 20, "#000000"),
    FillRect(40, 130, 200, 20, "#f5f5f5"),
    StrokeLine(40, 160, 240, 160),
    AdvancePage(),
    PlaceText(40, 40, "page two"),
]


# ========== Recording surface ==========

def test_recording_surface_keeps_instructions_in_order():
    surface = RecordingSurface()
    with surface:
        surface.render(SAMPLE)

    assert surface.finished
    assert not surface.is_open
    assert surface.pages == 2
    assert surface.texts() == ["Statement of Account", "right", "centre", "page two"]
    assert surface.instructions_executed == len(SAMPLE)
    assert surface.as_dicts()[0]["kind"] == "text"


def test_surface_discards_output_when_generation_fails():
    surface = RecordingSurface()
    with pytest.raises(RuntimeError):
        with surface:
            surface.render(SAMPLE[:3])
            raise RuntimeError("layout failed")

    assert surface.discarded
    assert surface.recorded == []
    assert not surface.is_open


def test_unsupported_instruction_is_rejected():
    surface = RecordingSurface()
    with pytest.raises(TypeError):
        with surface:
            surface.execute(object())


# ========== PDF surface ==========

def test_reportlab_surface_produces_a_pdf():
    surface = ReportLabSurface(title="Test")
    with surface:
        surface.render(SAMPLE)

    pdf = surface.getvalue()
    assert pdf.startswith(b"%PDF")
    assert not surface.is_open


def test_reportlab_surface_has_no_output_after_failure():
    surface = ReportLabSurface()
    with pytest.raises(ValueError):
        with surface:
            surface.render(SAMPLE[:2])
            raise ValueError("boom")

    with pytest.raises(RuntimeError):
        surface.getvalue()


def test_undecodable_image_draws_its_fallback(tmp_path):
    broken = tmp_path / "logo.png"
    broken.write_bytes(b"this is not an image")
    fallback = (FillRect(40, 20, 100, 30, "#8B1538"), PlaceText(50, 25, "BANK", "Helvetica-Bold", 14, "#ffffff"))

    surface = ReportLabSurface()
    with surface:
        surface.execute(PlaceImage(str(broken), 40, 20, 100, 30, fallback))

    assert surface.getvalue().startswith(b"%PDF")
    # the image itself plus both fallback instructions
    assert surface.instructions_executed == 3


@pytest.mark.parametrize("bank_id", TemplateRegistry.get_supported_banks())
def test_every_bank_renders_to_pdf(bank_id, account):
    use_case = GenerateStatementUseCase(measurer=ReportLabTextMeasurer())
    surface = ReportLabSurface()

    statement_layout = use_case.execute(surface, bank_id, account, make_rows(60), "5,000.00")

    assert surface.getvalue().startswith(b"%PDF")
    assert statement_layout.page_count >= 2


# ========== Asset store ==========

def test_asset_store_finds_images_by_bank_code(tmp_path):
    (tmp_path / "hdfc.png").write_bytes(b"png")
    (tmp_path / "sbi.jpg").write_bytes(b"jpg")
    store = AssetStore(str(tmp_path))

    assert store("HDFC") == str(tmp_path / "hdfc.png")
    assert store("SBI") == str(tmp_path / "sbi.jpg")
    assert store("PNB") is None


def test_asset_store_without_directory(tmp_path):
    assert AssetStore(str(tmp_path / "missing"))("PNB") is None


# ========== Text measurement ==========

def test_reportlab_measurer_wraps_long_text():
    measurer = ReportLabTextMeasurer(line_spacing=1.2)

    one_line = measurer.measure("short", "Helvetica", 10, 200)
    many_lines = measurer.measure("a long narration " * 20, "Helvetica", 10, 200)

    assert one_line == pytest.approx(12.0)
    assert many_lines > one_line


def test_reportlab_measurer_counts_empty_text_as_one_line():
    assert ReportLabTextMeasurer().measure("", "Helvetica", 10, 100) == pytest.approx(12.0)


def test_reportlab_measurer_honors_newlines():
    measurer = ReportLabTextMeasurer()
    assert len(measurer.wrap("Transaction\nDate", "Helvetica-Bold", 9, 200)) == 2


@pytest.mark.parametrize("font, size, width", [
    ("NoSuchFont", 10, 100),
    ("Helvetica", 0, 100),
    ("Helvetica", 10, 0),
])
def test_reportlab_measurer_failures_are_fatal(font, size, width):
    with pytest.raises(MeasurementFailureError):
        ReportLabTextMeasurer().measure("text", font, size, width)
