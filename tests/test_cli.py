"""Tests for sigstamp.ui.cli -- argument parsing and command handlers."""

from __future__ import annotations

import io
import json
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pikepdf
import pytest

from sigstamp.ui.cli import main

from conftest import make_pdf, make_png


def _run(*argv: str) -> None:
    with patch("sys.argv", ["sigstamp", *argv]):
        main()


def _run_exit(*argv: str) -> int:
    with pytest.raises(SystemExit) as exc_info:
        _run(*argv)
    return exc_info.value.code


def _cm(pdf_path: Path, page_idx: int = 0) -> list[float]:
    with pikepdf.open(pdf_path) as pdf:
        (instr,) = [
            i for i in pikepdf.parse_content_stream(pdf.pages[page_idx]) if str(i.operator) == "cm"
        ]
        return [float(v) for v in instr.operands]


@pytest.fixture
def files(tmp_path, valid_pdf_bytes, signature_png):
    pdf = tmp_path / "contract.pdf"
    pdf.write_bytes(valid_pdf_bytes)
    png = tmp_path / "sig.png"
    png.write_bytes(signature_png)
    return pdf, png


# ── place ───────────────────────────────────────────────────────────


def test_place_prints_record(config_dir, capsys):
    _run("place", "100", "100", "--canvas-width", "918", "--canvas-height", "1188")
    record = json.loads(capsys.readouterr().out)
    assert record["posX"] == pytest.approx(66.6667, abs=1e-3)
    assert record["posY"] == pytest.approx(625.3333, abs=1e-3)
    assert record["width"] == pytest.approx(266.6667, abs=1e-3)
    assert record["height"] == pytest.approx(100.0)
    assert record["pageNumber"] == 1


def test_place_with_page_and_size(config_dir, capsys):
    _run(
        "place", "0", "0",
        "--canvas-width", "612", "--canvas-height", "792",
        "--scale", "1", "--page", "3", "--sig-width", "100", "--sig-height", "50",
    )  # fmt: skip
    record = json.loads(capsys.readouterr().out)
    assert record == {"posX": 0.0, "posY": 742.0, "width": 100.0, "height": 50.0, "pageNumber": 3}


def test_place_clamps_unless_disabled(config_dir, capsys):
    _run("place", "-30", "0", "--canvas-width", "918", "--canvas-height", "1188")
    assert json.loads(capsys.readouterr().out)["posX"] == 0.0

    _run("place", "-30", "0", "--canvas-width", "918", "--canvas-height", "1188", "--no-clamp")
    assert json.loads(capsys.readouterr().out)["posX"] == pytest.approx(-20.0)


def test_place_bad_scale_exits_1(config_dir, capsys):
    code = _run_exit(
        "place", "0", "0", "--canvas-width", "10", "--canvas-height", "10", "--scale", "0"
    )
    assert code == 1
    assert "Error:" in capsys.readouterr().err


# ── sign ────────────────────────────────────────────────────────────


def test_sign_at_rectangle(config_dir, files, capsys):
    pdf, png = files
    _run("sign", str(pdf), "--image", str(png), "--at", "50", "60", "200", "75")

    out_path = pdf.with_name("contract_signed.pdf")
    assert out_path.exists()
    assert _cm(out_path) == pytest.approx([200, 0, 0, 75, 50, 60])
    out = capsys.readouterr().out
    assert "Signed contract.pdf: page 1" in out
    assert "contract_signed.pdf" in out


def test_sign_from_canvas_position(config_dir, files, tmp_path):
    pdf, png = files
    output = tmp_path / "out.pdf"
    _run("sign", str(pdf), "--image", str(png), "--canvas", "100", "100", "-o", str(output))
    assert _cm(output) == pytest.approx([266.6667, 0, 0, 100, 66.6667, 625.3333], abs=1e-3)


def test_sign_canvas_uses_page_size(config_dir, tmp_path, signature_png):
    pdf = tmp_path / "mixed.pdf"
    pdf.write_bytes(make_pdf((612, 792), (792, 612)))
    png = tmp_path / "sig.png"
    png.write_bytes(signature_png)
    output = tmp_path / "out.pdf"

    _run(
        "sign", str(pdf), "--image", str(png), "--canvas", "0", "0",
        "--page", "2", "--scale", "1", "-o", str(output),
    )  # fmt: skip
    assert _cm(output, page_idx=1) == pytest.approx([400, 0, 0, 150, 0, 612 - 150])


def test_sign_does_not_touch_input(config_dir, files, valid_pdf_bytes):
    pdf, png = files
    _run("sign", str(pdf), "--image", str(png), "--at", "0", "0", "10", "10")
    assert pdf.read_bytes() == valid_pdf_bytes


def test_sign_out_of_range_page_lenient(config_dir, files):
    pdf, png = files
    _run("sign", str(pdf), "--image", str(png), "--at", "0", "0", "10", "10", "--page", "5")
    assert pdf.with_name("contract_signed.pdf").exists()


def test_sign_strict_pages_flag(config_dir, files, capsys):
    pdf, png = files
    code = _run_exit(
        "sign", str(pdf), "--image", str(png), "--at", "0", "0", "10", "10",
        "--page", "5", "--strict-pages",
    )  # fmt: skip
    assert code == 1
    assert "out of range" in capsys.readouterr().err
    assert not pdf.with_name("contract_signed.pdf").exists()


def test_sign_strict_pages_from_env(config_dir, files):
    pdf, png = files
    with patch.dict("os.environ", {"SIGSTAMP_STRICT_PAGES": "1"}):
        code = _run_exit(
            "sign", str(pdf), "--image", str(png), "--at", "0", "0", "10", "10", "--page", "5"
        )
    assert code == 1


def test_sign_missing_pdf(config_dir, tmp_path, capsys):
    png = tmp_path / "sig.png"
    png.write_bytes(make_png())
    code = _run_exit("sign", str(tmp_path / "nope.pdf"), "--image", str(png), "--at", "0", "0", "1", "1")
    assert code == 1
    assert "PDF not found" in capsys.readouterr().err


def test_sign_malformed_pdf(config_dir, tmp_path, capsys):
    pdf = tmp_path / "bad.pdf"
    pdf.write_bytes(b"definitely not a pdf")
    png = tmp_path / "sig.png"
    png.write_bytes(make_png())
    code = _run_exit("sign", str(pdf), "--image", str(png), "--at", "0", "0", "1", "1")
    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_sign_non_png_image(config_dir, files, capsys):
    pdf, png = files
    png.write_bytes(b"GIF89a not a png")
    code = _run_exit("sign", str(pdf), "--image", str(png), "--at", "0", "0", "10", "10")
    assert code == 1
    assert "PNG" in capsys.readouterr().err


def test_sign_requires_placement(config_dir, files):
    pdf, png = files
    assert _run_exit("sign", str(pdf), "--image", str(png)) == 2


def test_sign_write_error_exits_1(config_dir, files, capsys):
    pdf, png = files
    with patch("sigstamp.ui.cli.sign.atomic_write", side_effect=OSError("read-only")):
        code = _run_exit("sign", str(pdf), "--image", str(png), "--at", "0", "0", "10", "10")
    assert code == 1
    assert "read-only" in capsys.readouterr().err


def _pdf_with_page_attrs(path: Path, **attrs) -> Path:
    """Write a single Letter page PDF with extra page dictionary entries."""
    pdf = pikepdf.Pdf.new()
    pdf.add_blank_page(page_size=(612, 792))
    for key, value in attrs.items():
        pdf.pages[0].obj[f"/{key}"] = value
    pdf.save(path)
    return path


def test_sign_canvas_on_cropped_page(config_dir, tmp_path, signature_png):
    """A drop point on the CropBox preview lands on the same spot of the signed page."""
    from PIL import Image, ImageChops

    from sigstamp.core.pdf import render_page

    pdf = _pdf_with_page_attrs(
        tmp_path / "cropped.pdf", CropBox=pikepdf.Array([100, 100, 512, 692])
    )
    png = tmp_path / "sig.png"
    png.write_bytes(signature_png)
    output = tmp_path / "out.pdf"

    preview = render_page(pdf.read_bytes(), scale=1.0)
    assert (preview.width, preview.height) == (412, 592)

    _run(
        "sign", str(pdf), "--image", str(png), "--canvas", "50", "50", "--scale", "1",
        "--sig-width", "200", "--sig-height", "80", "-o", str(output),
    )  # fmt: skip
    assert _cm(output) == pytest.approx([200, 0, 0, 80, 150, 562])

    after = render_page(output.read_bytes(), scale=1.0).image.convert("RGB")
    bbox = ImageChops.difference(after, Image.new("RGB", after.size, "white")).getbbox()
    assert bbox is not None
    for got, want in zip(bbox, (50, 50, 250, 130)):
        assert abs(got - want) <= 2, bbox


def test_sign_canvas_rejects_rotated_page(config_dir, tmp_path, signature_png, capsys):
    pdf = _pdf_with_page_attrs(tmp_path / "rotated.pdf", Rotate=90)
    png = tmp_path / "sig.png"
    png.write_bytes(signature_png)

    code = _run_exit("sign", str(pdf), "--image", str(png), "--canvas", "10", "10")
    assert code == 1
    err = capsys.readouterr().err
    assert "rotated by 90 degrees" in err
    assert "--at" in err
    assert not pdf.with_name("rotated_signed.pdf").exists()


def test_sign_at_allowed_on_rotated_page(config_dir, tmp_path, signature_png):
    pdf = _pdf_with_page_attrs(tmp_path / "rotated.pdf", Rotate=90)
    png = tmp_path / "sig.png"
    png.write_bytes(signature_png)

    _run("sign", str(pdf), "--image", str(png), "--at", "10", "20", "100", "40")
    assert _cm(pdf.with_name("rotated_signed.pdf")) == pytest.approx([100, 0, 0, 40, 10, 20])


# ── render ──────────────────────────────────────────────────────────


def test_render_default_output(config_dir, files, capsys):
    from PIL import Image

    pdf, _ = files
    _run("render", str(pdf))
    preview = pdf.with_name("contract_p1.png")
    with Image.open(preview) as img:
        assert img.size == (918, 1188)
    assert "918 x 1188" in capsys.readouterr().out


def test_render_scale_from_config(config_dir, files, tmp_path):
    from PIL import Image

    from sigstamp.config import save_settings

    save_settings(render_scale="0.5")
    pdf, _ = files
    output = tmp_path / "p.png"
    _run("render", str(pdf), "-o", str(output))
    with Image.open(output) as img:
        assert img.size == (306, 396)


def test_render_bad_page(config_dir, files, capsys):
    pdf, _ = files
    assert _run_exit("render", str(pdf), "--page", "4") == 1
    assert "out of range" in capsys.readouterr().err


# ── image ───────────────────────────────────────────────────────────


def test_image_writes_card(config_dir, tmp_path, capsys):
    from PIL import Image

    output = tmp_path / "card.png"
    _run("image", "--name", "Jane Roe", "--position", "CFO", "--organization", "Acme", "-o", str(output))
    with Image.open(output) as img:
        assert img.format == "PNG"
        assert img.size == (400, 150)
    assert "400 x 150" in capsys.readouterr().out


def test_image_card_can_be_signed(config_dir, files, tmp_path):
    pdf, _ = files
    card = tmp_path / "card.png"
    _run("image", "--name", "Jane Roe", "-o", str(card), "--sig-width", "300", "--sig-height", "100")
    _run("sign", str(pdf), "--image", str(card), "--at", "10", "10", "150", "50")
    with pikepdf.open(pdf.with_name("contract_signed.pdf")) as signed:
        ((_, img),) = signed.pages[0].Resources.XObject.items()
        assert (int(img.Width), int(img.Height)) == (300, 100)


# ── config ──────────────────────────────────────────────────────────


def test_config_show_defaults(config_dir, capsys):
    _run("config")
    assert json.loads(capsys.readouterr().out) == {
        "render_scale": 1.5,
        "signature_width": 400,
        "signature_height": 150,
        "strict_pages": False,
    }


def test_config_set_and_reset(config_dir, capsys):
    _, config_file = config_dir
    _run("config", "--set", "render_scale=2", "--set", "strict_pages=yes")
    assert json.loads(config_file.read_text(encoding="utf-8")) == {
        "render_scale": 2.0,
        "strict_pages": True,
    }
    assert "Saved" in capsys.readouterr().out

    _run("config", "--reset")
    assert not config_file.exists()


def test_config_set_invalid_value(config_dir, capsys):
    assert _run_exit("config", "--set", "render_scale=huge") == 1
    assert "Error:" in capsys.readouterr().err


def test_config_set_missing_equals(config_dir, capsys):
    assert _run_exit("config", "--set", "render_scale") == 1
    assert "key=value" in capsys.readouterr().err


# ── main() dispatch ─────────────────────────────────────────────────


def test_no_command_prints_help_and_exits_1(capsys):
    assert _run_exit() == 1
    assert "usage:" in capsys.readouterr().out.lower()


def test_verbose_enables_debug_logging(config_dir):
    with patch("sigstamp.ui.cli.logging.basicConfig") as mock_basic, patch("sys.stdout", io.StringIO()):
        _run("-v", "config")
    assert mock_basic.call_args.kwargs["level"] == 10


# ── __main__.py entry point ─────────────────────────────────────────


def test_main_module_help():
    """python -m sigstamp --help should exit 0 and print usage."""
    result = subprocess.run(
        [sys.executable, "-m", "sigstamp", "--help"],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 0
    assert "usage:" in result.stdout.lower()


def test_main_module_version():
    result = subprocess.run(
        [sys.executable, "-m", "sigstamp", "--version"],
        capture_output=True,
        text=True,
        timeout=30,
    )
    assert result.returncode == 0
    assert "sigstamp" in result.stdout.lower()
