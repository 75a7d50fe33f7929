import pytest
from unittest.mock import AsyncMock, patch
from PIL import Image
from image_optimizer.cli import main, render_report
from image_optimizer.schemas.files import Summary
from image_optimizer.schemas.pipeline import PipelineReport


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI from reconfiguring the root logger during tests."""
    with patch("image_optimizer.cli.configure_logging"):
        yield


def test_render_report_rows():
    report = PipelineReport(
        input_summary=Summary(min_kb=100, max_kb=300, avg_kb=200, total_files=3),
        output_summary=Summary(min_kb=40, max_kb=90, avg_kb=65, total_files=3),
        resized=True,
    )

    lines = render_report(report).splitlines()

    assert lines[1].split("|")[1:-1] == [" Files ", " Max Size ", " Min Size ", " Avg Size "]
    assert [c.strip() for c in lines[3].split("|")[1:-1]] == ["3", "300 KB", "100 KB", "200 KB"]
    assert [c.strip() for c in lines[4].split("|")[1:-1]] == ["3", "90 KB", "40 KB", "65 KB"]


def test_missing_input_is_reported(capsys):
    exit_code = main(["-o", "out"])

    assert exit_code == 1
    assert "input directory is required" in capsys.readouterr().err


def test_force_resize_without_height(capsys):
    with patch("image_optimizer.cli.run_pipeline", new_callable=AsyncMock) as mock_run:
        exit_code = main(["-i", "in", "-o", "out", "-w", "100", "-R"])

    assert exit_code == 1
    mock_run.assert_not_called()
    assert "height is required" in capsys.readouterr().err


def test_pipeline_error_exit_code(tmp_path, capsys):
    exit_code = main(["-i", str(tmp_path / "nope"), "-o", str(tmp_path / "out")])

    assert exit_code == 1
    assert "Error:" in capsys.readouterr().err


def test_options_reach_config(tmp_path):
    report = PipelineReport(
        input_summary=Summary(min_kb=1, max_kb=1, avg_kb=1, total_files=1),
        output_summary=Summary(min_kb=1, max_kb=1, avg_kb=1, total_files=1),
        resized=True,
    )
    with patch("image_optimizer.cli.run_pipeline", new_callable=AsyncMock) as mock_run:
        mock_run.return_value = report
        exit_code = main([
            "-i", "in", "-o", "out", "-w", "800", "-H", "600",
            "-e", "webp", "-a", "jpg, jpeg", "-R", "-c", "4",
        ])

    assert exit_code == 0
    config = mock_run.call_args[0][0]
    assert (config.width, config.height, config.force_resize) == (800, 600, True)
    assert config.output_extension == "webp"
    assert config.allowed_extensions == frozenset({"jpg", "jpeg"})
    assert config.concurrency == 4


def test_end_to_end(tmp_path, capsys):
    input_dir = tmp_path / "in"
    input_dir.mkdir()
    Image.new("RGB", (50, 50), "white").save(input_dir / "pic.jpg")

    exit_code = main(["-i", str(input_dir), "-o", str(tmp_path / "out")])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Files" in out
    assert "Time Elapsed" in out


def test_bad_settings_reported(monkeypatch, capsys):
    """Invalid environment settings exit 1 with a message, not a traceback."""
    from image_optimizer.config import get_settings

    monkeypatch.setenv("DISPATCH__CONCURRENCY", "0")
    get_settings.cache_clear()
    try:
        exit_code = main(["-i", "in", "-o", "out"])
    finally:
        get_settings.cache_clear()

    assert exit_code == 1
    assert "Invalid settings" in capsys.readouterr().err
