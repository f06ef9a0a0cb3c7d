"""Output formatting for the thumbnailer CLI."""

import json
from typing import Any, Dict, List

from .config import ThumbnailSettings
from .size import ThumbnailSize
from .thumbnail import OutputFormat


class OutputFormatter:
    """Handles formatting and display of thumbnail results."""

    @staticmethod
    def print_sizes() -> None:
        """Print the size catalog."""
        print(f"\nAvailable sizes ({len(ThumbnailSize)}):")
        print("-" * 50)
        for size in ThumbnailSize:
            width, height = size.dimensions()
            print(f"  {size.name.lower():<10} {width:>5} x {height:<5}")

    @staticmethod
    def print_formats(media_types: List[str]) -> None:
        """Print accepted input types and available output formats."""
        print("\nInput media types:")
        print("-" * 50)
        for media_type in media_types:
            print(f"  {media_type}")
        print("\nOutput formats:")
        print("-" * 50)
        for fmt in OutputFormat:
            alpha = "alpha" if fmt.keeps_alpha else "no alpha"
            print(f"  {fmt.value:<6} {fmt.content_type:<12} ({alpha})")

    @staticmethod
    def print_results(results: List[Dict[str, Any]], source: str) -> None:
        """Print a table of written thumbnails."""
        print(f"\nThumbnails for: {source}")
        print("-" * 70)
        if not results:
            print("No sizes requested.")
            return
        print(f"{'Size':<10} {'Dimensions':>12} {'Bytes':>10}  Path")
        for item in results:
            dims = f"{item['width']}x{item['height']}"
            print(f"{item['size']:<10} {dims:>12} {item['bytes']:>10,}  {item['path']}")

    @staticmethod
    def print_results_json(results: List[Dict[str, Any]]) -> None:
        print(json.dumps(results, indent=2))

    @staticmethod
    def print_settings(settings: ThumbnailSettings) -> None:
        print("\nCurrent settings:")
        print("-" * 50)
        print(f"  max_workers:  {settings.max_workers or 'auto'}")
        print(f"  upscale:      {'on' if settings.upscale else 'off'}")
        print(f"  jpeg_quality: {settings.jpeg_quality}")
        print(f"  webp_quality: {settings.webp_quality}")
        print(f"  background:   {','.join(str(c) for c in settings.background)}")
