"""
Package the viewport_positioner addon directory as a release zip.

Usage:
  python scripts/package_addon.py --version 1.0.0
"""

from __future__ import annotations

import argparse
import hashlib
import zipfile
from pathlib import Path

ADDON_NAME = "viewport_positioner"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument("--version", required=True, help="Version string, e.g. 1.0.0")
    parser.add_argument(
        "--output-dir",
        default="dist",
        help="Output directory for packaged files",
    )
    return parser.parse_args()


def sha256_file(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


def iter_addon_files(addon_dir: Path):
    for file_path in sorted(addon_dir.rglob("*")):
        if file_path.is_dir() or "__pycache__" in file_path.parts:
            continue
        if file_path.suffix == ".pyc":
            continue
        yield file_path


def main() -> None:
    args = parse_args()
    root = Path(__file__).resolve().parents[1]
    addon_dir = root / ADDON_NAME
    output_dir = root / args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    zip_path = output_dir / f"{ADDON_NAME}-v{args.version}.zip"
    checksum_path = output_dir / f"{ADDON_NAME}-v{args.version}.sha256"

    with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
        for file_path in iter_addon_files(addon_dir):
            zf.write(file_path, file_path.relative_to(root).as_posix())

    checksum = sha256_file(zip_path)
    checksum_path.write_text(f"{checksum}  {zip_path.name}\n", encoding="utf-8")

    print(f"Created: {zip_path}")
    print(f"Created: {checksum_path}")


if __name__ == "__main__":
    main()
