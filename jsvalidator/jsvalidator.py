"""

Command line utility to validate JSON instances against a JSON schema.

"""


import argparse
import logging
import os
import sys
import tempfile

from jsvalidator import _version
from jsvalidator.validatefile import validate_json_instances


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the command line utility."""
    parser = argparse.ArgumentParser(description='Validate JSON instances against a JSON schema.')
    parser.add_argument('--version', action='store_true', help='Print the version of jsvalidator.')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level for diagnostics.')

    subparsers = parser.add_subparsers(dest='command')
    validate_parser = subparsers.add_parser('validate', help='Validate JSON, JSON array or JSON Lines files.')
    validate_parser.add_argument('input', nargs='*', help='Instance files to validate. Reads stdin if omitted.')
    validate_parser.add_argument('--schema', required=True, help='Path to the JSON schema file.')
    validate_parser.add_argument('--quiet', action='store_true',
                                 help='Suppress output, exit with code 0 if valid, 1 if invalid.')
    return parser


def main(argv=None):
    """Main function for the command line utility."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format='%(levelname)s %(name)s: %(message)s')

    if args.version:
        print(f'jsvalidator {_version.version}')
        return

    if args.command is None:
        parser.print_help()
        return

    temp_input = None
    input_files = args.input
    try:
        if not input_files:
            temp_input = tempfile.NamedTemporaryFile(delete=False, mode='w', encoding='utf-8', suffix='.json')
            temp_input.write(sys.stdin.read())
            temp_input.flush()
            temp_input.close()
            input_files = [temp_input.name]

        valid_count, invalid_count = validate_json_instances(
            input_files=input_files,
            schema_file=args.schema,
            verbose=not args.quiet
        )
    except Exception as e:  # pylint: disable=broad-except
        print("Error: ", str(e))
        sys.exit(1)
    finally:
        if temp_input:
            try:
                os.remove(temp_input.name)
            except OSError as e:
                print(f"Error: Could not delete temporary input file {temp_input.name}. {e}")

    if not args.quiet:
        total = valid_count + invalid_count
        print(f"\nValidation summary: {valid_count}/{total} instances valid")

    if invalid_count > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
