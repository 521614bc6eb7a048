"""
Example usage of SORInpaint package for image restoration.
"""

from pathlib import Path

import numpy as np

from sorinpaint import InpaintConfig, InpaintingPipeline, Tensor
from sorinpaint.core.pipeline import run_pipeline
from sorinpaint.restoration import (
    build_random_known_mask,
    make_damaged_view,
    reconstruct,
    rmse_on_missing,
)
from sorinpaint.utils.helpers import setup_logging


def make_test_image(height: int = 96, width: int = 128) -> np.ndarray:
    """Smooth 8-bit RGB gradient used in place of a decoded photo."""
    yy, xx = np.mgrid[0:height, 0:width]
    red = 255 * xx / (width - 1)
    green = 255 * yy / (height - 1)
    blue = 127 + 127 * np.sin(xx / 12.0) * np.cos(yy / 9.0)
    return np.stack([red, green, blue], axis=-1).round().astype(np.uint8)


# Example 1: Simple usage with convenience function
def example_simple():
    """Random damage and reconstruction in one call."""
    print("Example 1: Simple usage")
    print("-" * 50)

    result = run_pipeline(
        make_test_image(),
        log_level="INFO",
        damage_percent=30.0,
        seed=42,
        max_iter=1000,
        tol=1e-4,
    )
    print(f"  Iterations: {result.iterations} | RMSE: {result.rmse:.4f}")


# Example 2: Painted scratches, step by step
def example_manual_mask():
    """Paint a scratch across the image, then reconstruct it."""
    print("\nExample 2: Manual mask, step-by-step")
    print("-" * 50)

    setup_logging("INFO")

    config = InpaintConfig(use_manual_mask=True, brush_size=7, max_iter=2000, tol=1e-5)
    pipeline = InpaintingPipeline(config)
    pipeline.load_uint8(make_test_image())

    # Diagonal stroke
    for t in range(0, 120, 2):
        pipeline.paint(x=t, y=10 + t // 2)
    print(f"  Painted pixels: {pipeline.painted_pixel_count}")

    pipeline.apply_damage()
    result = pipeline.run_reconstruction()

    print(f"  Unknown pixels: {pipeline.unknown_pixel_count}")
    print(f"  Summary: {result.summary()}")
    restored = result.reconstructed.to_uint8()
    print(f"  Restored image: {restored.shape}, dtype={restored.dtype}")


# Example 3: Using the core functions directly
def example_core_functions():
    """Call the restoration functions without the pipeline."""
    print("\nExample 3: Core functions")
    print("-" * 50)

    source = Tensor.from_uint8(make_test_image(48, 64))
    known = build_random_known_mask(source.width, source.height, 50.0, rng=np.random.default_rng(0))
    damaged = make_damaged_view(source, known)

    print(f"  RMSE of damaged view: {rmse_on_missing(source, damaged, known):.4f}")
    for max_iter in (10, 100, 1000):
        result = reconstruct(damaged, known, max_iter=max_iter, tol=1e-6, source=source)
        print(f"  max_iter={max_iter:5d}: sweeps={result.iterations}, RMSE={result.rmse:.4f}")


# Example 4: Configuration files
def example_config_file():
    """Save a configuration to YAML, edit it, and load it back."""
    print("\nExample 4: YAML configuration")
    print("-" * 50)

    config = InpaintConfig(use_manual_mask=False, damage_percent=20.0, seed=1)
    path = config.to_yaml_file(Path("example_output") / "inpaint_config.yaml")
    loaded = InpaintConfig.from_yaml_file(path)
    print(f"  Saved to {path}")
    print(f"  Loaded: damage_percent={loaded.damage_percent}, seed={loaded.seed}")


if __name__ == "__main__":
    print("SORInpaint Package Examples")
    print("=" * 50)

    example_simple()
    example_manual_mask()
    example_core_functions()
    # example_config_file()  # Writes to ./example_output
