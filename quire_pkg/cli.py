#!/usr/bin/env python3
"""
Command-line interface for Quire - static site generator.
"""

import sys
import argparse
from typing import List, Optional

from . import __version__
from .core import Quire
from .errors import QuireError
from .settings import QuireSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Quire - Static Site Generator')
    parser.add_argument('--config', type=str,
                        help='Configuration file (default: first of config.toml, config.yml, '
                             'config.yaml, config.json in the current directory)')
    parser.add_argument('--output', type=str,
                        help='Output directory for generated site')
    parser.add_argument('--content', type=str,
                        help='Content directory containing markdown files')
    parser.add_argument('--templates', type=str,
                        help='Templates directory')
    parser.add_argument('--static', type=str,
                        help='Static assets directory to copy to output')
    parser.add_argument('--base-url', dest='base_url', type=str,
                        help='Override the base URL from the configuration file')
    parser.add_argument('--log-file', dest='log_file', type=str,
                        help='Also write a debug log to this file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show debug output')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        # Load settings from configuration file
        settings_loader = QuireSettings(config_file=args.config)
        settings_loader.load_settings()

        # Command line arguments take precedence
        args_dict = {k: v for k, v in vars(args).items() if v is not None}
        final_settings = settings_loader.merge_with_args(args_dict)
        config = settings_loader.site_config(final_settings)

        generator = Quire(
            config,
            content_dir=final_settings['content'],
            templates_dir=final_settings['templates'],
            static_dir=final_settings['static'],
            output_dir=final_settings['output'],
            verbose=args.verbose,
            log_file=final_settings['log_file'],
        )
        generator.build()

    except QuireError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
