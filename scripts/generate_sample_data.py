#!/usr/bin/env python3
"""Generate sample NACH batch files for manual validation.

Writes one debit and one credit file into the local/ folder. Each file
mixes valid lines with lines that fail acceptance and lines that cannot be
parsed, so ingestion and reprocessing can be exercised end to end.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from nach_core.generators import BatchFileGenerator, SampleFile
from nach_core.models.enums import FileType


def save_file(sample: SampleFile, output_dir: Path) -> Path:
    """Write a rendered batch file to disk."""
    path = output_dir / sample.file_name
    path.write_bytes(sample.content)
    print(
        f"Saved {sample.data_lines} lines to {path} "
        f"({sample.valid_lines} valid, {sample.error_lines} error, {sample.malformed_lines} malformed)"
    )
    return path


def main() -> None:
    """Generate sample batch files."""
    parser = argparse.ArgumentParser(description="Generate sample NACH batch files")
    parser.add_argument("--lines", type=int, default=50, help="Data lines per file")
    parser.add_argument("--error-rate", type=float, default=0.1)
    parser.add_argument("--malformed-rate", type=float, default=0.05)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--output-dir", type=Path, default=project_root / "local")
    args = parser.parse_args()

    args.output_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print("Generating Sample NACH Files")
    print("=" * 60)

    generator = BatchFileGenerator(seed=args.seed)
    for file_type in (FileType.DR, FileType.CR):
        sample = generator.generate(
            num_lines=args.lines,
            error_rate=args.error_rate,
            malformed_rate=args.malformed_rate,
            file_type=file_type,
        )
        save_file(sample, args.output_dir)

    print(f"\nAll files saved to: {args.output_dir}")


if __name__ == "__main__":
    main()
