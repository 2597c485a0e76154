"""
Filter Chain Demo

Loads an image (or builds a gradient if none is given), runs it through a
few filters, steps back and forth through history and saves the result.

Usage:
    python examples/filter_chain_demo.py [input_image] [output_image]
"""

import logging
import sys
import tempfile
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from PE_Libs.ImageEditingLib import FilterKind, FilterParameters, RasterBuffer, default_edited_name
from PE_Libs.SessionLib import EditWorker, session_api
from PE_Libs.errors import SessionBusyError


def build_gradient(width=64, height=48):
    """A horizontal blue-to-red gradient with a bright square in the middle."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    ramp = np.linspace(0, 255, width).astype(np.uint8)
    pixels[..., 0] = ramp[::-1]
    pixels[..., 2] = ramp
    pixels[..., 3] = 255
    pixels[height // 3:2 * height // 3, width // 3:2 * width // 3, :3] = 230
    return RasterBuffer.from_array(pixels)


def describe(label, snapshot):
    histogram = snapshot.histogram
    peak = histogram.max_value if histogram is not None else "n/a"
    print(f"  {label:<28} center={snapshot.buffer.pixel(snapshot.buffer.width // 2, snapshot.buffer.height // 2)} peak bin={peak}")


def example_session(input_path, output_path):
    print("=" * 60)
    print("Example 1: Editing session")
    print("=" * 60)

    if input_path:
        session = session_api.open_image(input_path)
    else:
        gradient = build_gradient()
        session = session_api.load_raster(gradient.to_bytes(), gradient.width, gradient.height)

    describe("loaded", session.snapshot())
    describe("grayscale", session_api.apply_filter(session, FilterKind.GRAYSCALE))
    describe(
        "brightness/contrast +20/+40",
        session_api.apply_filter(
            session,
            FilterKind.BRIGHTNESS_CONTRAST,
            FilterParameters(brightness=20, contrast=40),
        ),
    )
    describe("edge detection", session_api.apply_filter(session, FilterKind.EDGE_DETECTION))
    describe("undo", session_api.undo(session))
    describe("redo", session_api.redo(session))
    describe("reset", session_api.reset(session))
    describe("sepia", session_api.apply_filter(session, "Sepia"))

    saved = session_api.save_image(session, output_path)
    print(f"\n✓ Saved {saved} (dirty={session.is_dirty}, undo depth={session.undo_count})")
    print()


def example_background_worker():
    print("=" * 60)
    print("Example 2: Background worker rejects overlapping requests")
    print("=" * 60)

    with EditWorker() as worker:
        worker.submit_load(build_gradient(512, 512)).result()

        future = worker.submit_apply(FilterKind.GAUSSIAN_BLUR, FilterParameters(blur_radius=8))
        try:
            worker.submit_apply(FilterKind.GAUSSIAN_BLUR, FilterParameters(blur_radius=9))
            print("  Second request accepted (first one had already finished)")
        except SessionBusyError as e:
            print(f"✓ Second request rejected: {e}")

        describe("blurred", future.result())
    print()


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    input_path = sys.argv[1] if len(sys.argv) > 1 else None
    if len(sys.argv) > 2:
        output_path = Path(sys.argv[2])
    else:
        output_path = Path(tempfile.gettempdir()) / default_edited_name(input_path)

    example_session(input_path, output_path)
    example_background_worker()


if __name__ == "__main__":
    main()
