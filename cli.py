#!/usr/bin/env python3
import argparse

from linkage.orchestrator import run_once


def main():
    parser = argparse.ArgumentParser(description="Resolve links in a content-delivery batch")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    parser.add_argument("--input", required=True, help="Path to a JSON batch (query array or sync response)")
    parser.add_argument("--locale", type=str, help="Locale of flat query fields (defaults to the space default)")
    parser.add_argument("--nullify", dest="nullify_unresolved", action="store_true", help="Drop links that cannot be resolved")
    parser.add_argument("--no-nullify", dest="nullify_unresolved", action="store_false", help="Keep unresolved link placeholders")
    parser.add_argument("--output-dir", dest="output_dir", type=str, help="Directory for the resolved JSON")
    parser.set_defaults(nullify_unresolved=None)
    args = parser.parse_args()

    overrides = {
        "nullify_unresolved": args.nullify_unresolved,
        "output_dir": args.output_dir,
    }

    path = run_once(args.config, args.input, locale=args.locale, overrides=overrides)
    print(path)


if __name__ == "__main__":
    main()
