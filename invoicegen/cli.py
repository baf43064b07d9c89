"""Invoice generator CLI."""
import argparse
import logging
import sys
from pathlib import Path

from .config import load_options
from .models import DEFAULT_YML
from .service import InvoiceService

logger = logging.getLogger(__name__)

YML_EXAMPLE = """\
from: |
  My multiline name
  Here's a second line
client: |
  My multiline client
  Hey ho, second line here
notes: |
  If all your data are always the same, just the invoice number changes,
  save the static data in a yml and pass the invoice number on command line
  by using (--invoice-counter).

  Note that the date always defaults to today, and the due-date to today + 15
items:
  -
    - Nice item for %past_month% %year%
    - 1
    - 12334
  -
    - Other item, for %month%
    - 0.5
    - 100000
currency: GBP
invoice_counter: 1
"""

# Flags that become invoice options; the rest only steer the CLI
OPTION_FLAGS = (
    "client", "currency", "date", "due_date", "from", "header", "notes",
    "po", "invoice_counter", "yml", "template", "locale", "send_to",
    "send_from", "smtp_address", "smtp_port", "smtp_user", "smtp_password",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='invoicegen',
        description='🧾 Generate a PDF invoice from an HTML template',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Values not given on the command line are read from the YML file.
Flags given on the command line win over the YML file.
Only the known options are read from the YML file; other keys are
ignored, so a %custom_key% placeholder in the template is left as it is.

Examples:
  invoicegen --show-yml-example > invoice.yml
  invoicegen --po 4711
  invoicegen --yml acme.yml --invoice-counter 42 --send-to billing@acme.com
"""
    )
    parser.add_argument('--client', help='Contents of client field.')
    parser.add_argument('--currency', help='Currency used (default: USD).')
    parser.add_argument('--date', help='Invoice date (default: today).')
    parser.add_argument('--due-date', help='Due date (default: today + 15).')
    parser.add_argument('--from', help='Contents of from field.')
    parser.add_argument('--header', help='Contents of the header (default: Invoice).')
    parser.add_argument('--notes', help='Contents of notes field.')
    parser.add_argument('--po', help='PO number.')
    parser.add_argument('--invoice-counter', help='Invoice counter number.')
    parser.add_argument('--yml', default=DEFAULT_YML,
                        help='YML file with values for parameters not given on the command line.')
    parser.add_argument('--template', help='HTML template (default: ./invoicegenerator.html).')
    parser.add_argument('--locale', help='Locale for money formatting (default: en_US).')
    parser.add_argument('--output-dir', type=Path, default=Path('.'),
                        help='Where to write the PDF.')
    parser.add_argument('--send-to', help='Send generated invoice to this email.')
    parser.add_argument('--send-from', help='Sender address of the email (default: SMTP user).')
    parser.add_argument('--smtp-address', help='SMTP server address.')
    parser.add_argument('--smtp-port', type=int, help='SMTP server port (default: 587).')
    parser.add_argument('--smtp-user', help='SMTP user.')
    parser.add_argument('--smtp-password', help='SMTP password.')
    parser.add_argument('--show-yml-example', action='store_true',
                        help='Show an example of a YML file that can be used by this script.')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log each step.')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.show_yml_example:
        print(YML_EXAMPLE, end='')
        return 0

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    cli_values = {k: v for k, v in vars(args).items() if k in OPTION_FLAGS}
    try:
        options = load_options(cli_values)
        pdf = InvoiceService(output_dir=args.output_dir).generate(options)
    except Exception as e:
        logger.info('Invoice generation failed', exc_info=True)
        print(f'❌ {e}', file=sys.stderr)
        return 1

    logger.info(f'Invoice ready: {pdf}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
