import textwrap
from pathlib import Path

import pytest

from vol_dispatch.config import BatchSettings


FAKE_TOOL = textwrap.dedent(
    """\
    #!/bin/sh
    # Usage: fake-vol -f IMAGE -r csv MODULE
    image="$2"
    module="$5"
    echo "progress noise for $module" >&2
    if [ "$module" = "badmodule" ]; then
        echo "Offset,Name"
        exit 3
    fi
    sleep "${FAKE_VOL_SLEEP:-0}"
    echo "Offset,Name"
    echo "0x1000,$module"
    echo "image=$image"
    """
)


@pytest.fixture
def fake_tool(tmp_path) -> Path:
    """Executable standing in for the analysis tool."""
    tool = tmp_path / "fake-vol"
    tool.write_text(FAKE_TOOL)
    tool.chmod(0o755)
    return tool


@pytest.fixture
def image(tmp_path) -> Path:
    path = tmp_path / "memdump.raw"
    path.write_bytes(b"\x00" * 16)
    return path


@pytest.fixture
def make_settings(tmp_path, fake_tool, image):
    """Build BatchSettings for a modules file with the given contents."""

    def _make(modules_text: str, parallelism: int = 2, output_dir: Path | None = None) -> BatchSettings:
        modules = tmp_path / "modules.txt"
        modules.write_text(modules_text)
        return BatchSettings(
            tool_path=str(fake_tool),
            image_path=str(image),
            modules_path=str(modules),
            output_dir=str(output_dir or tmp_path / "out"),
            parallelism=parallelism,
        )

    return _make
