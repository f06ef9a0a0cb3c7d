#!/usr/bin/env python3
"""
Thumbnailer
A CLI tool to create fixed-size thumbnails from an image file in one pass.
The input type comes from --type or the file extension, never from the bytes.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from thumbnailer import (
    ConfigManager,
    OutputFormat,
    ThumbError,
    ThumbnailSize,
    create_thumbnails,
    supported_media_types,
)
from thumbnailer.output import OutputFormatter


def detect_content_type(filename: str) -> Optional[str]:
    ext = Path(filename).suffix.lower()
    mapping = {
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".png": "image/png",
        ".gif": "image/gif",
        ".bmp": "image/bmp",
        ".webp": "image/webp",
        ".tif": "image/tiff",
        ".tiff": "image/tiff",
        ".ico": "image/x-icon",
        ".heic": "image/heic",
    }
    return mapping.get(ext)


def _parse_sizes(value: str) -> List[ThumbnailSize]:
    return [ThumbnailSize.from_name(s) for s in value.split(",") if s.strip()]


def write_thumbnails(
    input_path: Path,
    media_type: str,
    sizes: List[ThumbnailSize],
    fmt: OutputFormat,
    output_dir: Path,
    config: ConfigManager,
) -> List[Dict[str, Any]]:
    """Create thumbnails for ``input_path`` and write one file per size.

    Returns:
        One summary dict per written file, in request order.
    """
    with open(input_path, "rb") as f:
        thumbnails = create_thumbnails(f, media_type, sizes, settings=config.settings())

    output_dir.mkdir(parents=True, exist_ok=True)
    results: List[Dict[str, Any]] = []
    seen: Dict[ThumbnailSize, int] = {}
    for size, thumb in zip(sizes, thumbnails):
        width, height = thumb.dimensions()
        data = thumb.to_bytes(fmt)
        # Repeated sizes get a numeric suffix so no file is overwritten
        seen[size] = seen.get(size, 0) + 1
        suffix = f"_{seen[size]}" if seen[size] > 1 else ""
        out_path = output_dir / f"{input_path.stem}_{size.name.lower()}{suffix}{fmt.extension}"
        out_path.write_bytes(data)
        results.append(
            {
                "size": size.name.lower(),
                "width": width,
                "height": height,
                "bytes": len(data),
                "path": str(out_path),
            }
        )
    return results


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Create fixed-size thumbnails from an image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=r"""
Examples:
  %(prog)s photo.jpg
  %(prog)s photo.jpg --sizes small,large --format webp --output-dir thumbs
  %(prog)s upload.bin --type image/png --json
  %(prog)s --list-sizes
  %(prog)s --set-upscale off
        """,
    )

    parser.add_argument("input", nargs="?", help="Image file to create thumbnails from")
    parser.add_argument("--type", metavar="MIME", help="Declared media type (default: from file extension)")
    parser.add_argument(
        "--sizes",
        metavar="SIZES",
        default="small,medium,large",
        help="Comma-separated size classes (default: small,medium,large)",
    )
    parser.add_argument(
        "--format",
        metavar="FORMAT",
        default="png",
        help="Output format: png, jpeg or webp (default: png)",
    )
    parser.add_argument(
        "--output-dir",
        metavar="DIR",
        default=".",
        help="Directory to write thumbnails to (default: current directory)",
    )
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--list-sizes", action="store_true", help="List available size classes")
    parser.add_argument("--list-formats", action="store_true", help="List input types and output formats")
    parser.add_argument("--show-config", action="store_true", help="Show the effective settings")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    # Configuration options
    parser.add_argument("--set-jpeg-quality", type=int, metavar="N", help="Set default JPEG quality (1-95)")
    parser.add_argument("--set-webp-quality", type=int, metavar="N", help="Set default WEBP quality (0-100)")
    parser.add_argument("--set-upscale", choices=("on", "off"), help="Enlarge images smaller than the box")
    parser.add_argument("--set-max-workers", type=int, metavar="N", help="Set the resize pool size (0 = auto)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        formatter = OutputFormatter()
        config = ConfigManager()

        # Track if any action was performed
        action_performed = False

        # Configuration actions
        updates: Dict[str, Any] = {}
        if args.set_jpeg_quality is not None:
            updates["jpeg_quality"] = args.set_jpeg_quality
        if args.set_webp_quality is not None:
            updates["webp_quality"] = args.set_webp_quality
        if args.set_max_workers is not None:
            updates["max_workers"] = args.set_max_workers or None
        if updates:
            # Raises ValueError before anything is saved
            dataclasses.replace(config.settings(), **updates)

        if args.set_jpeg_quality is not None:
            config.set_jpeg_quality(args.set_jpeg_quality)
            print("JPEG quality saved.")
            action_performed = True
        if args.set_webp_quality is not None:
            config.set_webp_quality(args.set_webp_quality)
            print("WEBP quality saved.")
            action_performed = True
        if args.set_upscale:
            config.set_upscale(args.set_upscale == "on")
            print("Upscale policy saved.")
            action_performed = True
        if args.set_max_workers is not None:
            config.set_max_workers(args.set_max_workers or None)
            print("Max workers saved.")
            action_performed = True

        if args.show_config:
            formatter.print_settings(config.settings())
            action_performed = True

        if args.list_sizes:
            formatter.print_sizes()
            action_performed = True

        if args.list_formats:
            formatter.print_formats(supported_media_types())
            action_performed = True

        if args.input:
            input_path = Path(args.input)
            media_type = args.type or detect_content_type(input_path.name)
            if media_type is None:
                raise ValueError(f"Cannot tell the media type of {input_path.name}; pass --type")

            results = write_thumbnails(
                input_path,
                media_type,
                _parse_sizes(args.sizes),
                OutputFormat.from_name(args.format),
                Path(args.output_dir),
                config,
            )
            if args.json:
                formatter.print_results_json(results)
            else:
                formatter.print_results(results, str(input_path))
            action_performed = True

        # If no specific action requested, show help
        if not action_performed:
            parser.print_help()

    except (ThumbError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
