#!/usr/bin/env python3
"""Strategy configuration validation script."""

import argparse
import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from candlepilot.config.loader import ConfigLoader
from candlepilot.config.validation import ConfigValidator
from candlepilot.errors import ConfigurationError


def main() -> int:
    """Validate one or more YAML strategy files."""
    parser = argparse.ArgumentParser(description="Validate candlepilot strategy files")
    parser.add_argument(
        "paths",
        nargs="*",
        default=[str(project_root / "config" / "strategy.example.yaml")],
        help="YAML strategy files to validate"
    )
    args = parser.parse_args()

    print("🔍 Validating strategy configuration...")
    all_valid = True

    for raw_path in args.paths:
        path = Path(raw_path)
        print(f"\n📄 {path}")

        if not path.exists():
            print("❌ File not found")
            all_valid = False
            continue

        loader = ConfigLoader.create(path)
        try:
            errors = ConfigValidator.validate_options(loader.merge_config())
            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
                continue

            options = loader.load()
            print(f"✅ {options.ticker} on {options.broker} ({options.instrument_type}, {options.interval})")

        except ConfigurationError as e:
            print(f"❌ {e}")
            all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        return 0

    print("\n❌ Configuration validation failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
