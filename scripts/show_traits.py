#!/usr/bin/env python3
"""Print stored traits as a table."""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from analytics_traits.config import TraitsConfig, load_config
from analytics_traits.report import format_traits_table
from analytics_traits.store import TraitsStore
from analytics_traits.utils import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Show stored traits")
    parser.add_argument("--config", type=str, default=None)
    parser.add_argument("--path", type=str, default=None, help="Overrides store.path")
    args = parser.parse_args()

    cfg = load_config(args.config) if args.config else TraitsConfig()
    log = setup_logging(cfg.logging.level.value)
    store = TraitsStore(args.path or cfg.store.path, indent=cfg.store.indent)

    traits = store.load()
    if traits is None:
        log.error(f"No traits stored at {store.path}")
        sys.exit(1)

    log.info(f"Traits from {store.path}")
    print(format_traits_table(traits))


if __name__ == "__main__":
    main()
