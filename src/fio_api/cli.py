"""Command-line interface for the Fio API client."""

import os
import sys
import click
from datetime import date
from pathlib import Path
from typing import Optional
import logging

from .client.http import FioClient, FioClientWithImport
from .models.export import (
    ExportFormat,
    ExportRequest,
    Last,
    Merchant,
    Periods,
    SetLastDate,
    SetLastId,
    TRANSACTION_FORMATS,
)
from .models.period import FioPeriod
from .parsers.base import encode_request_date
from .parsers.response_reader import FioResponse
from .payments.models import DomesticPaymentType
from .utils.config_manager import ConfigManager
from .utils.csv_writer import TransactionCSVWriter
from .utils.error_handler import FioError


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)
# httpx logs request URLs, and export URLs carry the token
logging.getLogger('httpx').setLevel(logging.WARNING)

DATE_FORMATS = ['%Y-%m-%d']
FORMAT_CHOICES = [fmt.value for fmt in ExportFormat]
MERCHANT_FORMAT_CHOICES = sorted(fmt.value for fmt in TRANSACTION_FORMATS)


class FioCLI:
    """Main CLI class holding configuration and the lazily created client"""

    def __init__(self, config_path: Optional[str] = None, transport=None):
        self.config_manager = ConfigManager(config_path)
        self.config = self.config_manager.load_config()
        self._transport = transport
        self._client: Optional[FioClient] = None

    @property
    def client(self) -> FioClient:
        if self._client is None:
            token = self.config_manager.load_token(self.config)
            self._client = FioClient.from_config(self.config, token, transport=self._transport)
        return self._client

    def fetch(self, request: ExportRequest) -> FioResponse:
        return self.client.export_response(request)

    def download(self, request: ExportRequest, output_path: str) -> int:
        """Save the raw body of an export; returns the number of bytes written"""
        content = self.client.export(request).content
        Path(output_path).write_bytes(content)
        return len(content)

    def report(self, response: FioResponse, output_path: Optional[str] = None) -> int:
        """Print the info block and the records of a CSV response"""
        info = response.read_info()
        for key, value in info.items():
            click.echo(f"  {key}: {value}")

        records = list(response.transactions())
        if not records:
            click.echo("No transactions")
        for record in records:
            type_label = record.transaction_type.label if record.transaction_type else ''
            click.echo(
                f"{record.date.isoformat()}  {record.amount:>12.2f} {record.currency}  "
                f"{record.counter_account_name or record.counter_account}  {type_label}".rstrip()
            )

        if output_path:
            self.write_csv(info, records, output_path)
        return len(records)

    def write_csv(self, info, records, output_path: str) -> str:
        """Write records to output_path; a directory gets a file named after the account"""
        if os.path.isdir(output_path):
            writer = TransactionCSVWriter(output_path)
            output_path = writer.create_unique_filename(writer.generate_output_path(info))
        else:
            writer = TransactionCSVWriter(os.path.dirname(output_path) or ".")
        written = writer.write_transactions(records, output_path)
        click.echo(f"✓ {written} transactions written to {output_path}")
        return output_path

    def close(self) -> None:
        if self._client is not None:
            self._client.close()


def _as_date(value) -> date:
    return value.date() if hasattr(value, 'date') else value


# CLI Commands using Click
@click.group()
@click.option('--config', '-c', help='Path to configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """Fio API - Download transactions and statements, upload payments"""

    ctx.ensure_object(dict)
    try:
        cli_instance = FioCLI(config, transport=ctx.obj.get('transport'))
    except FioError as e:
        click.echo(f"✗ Configuration error: {e}")
        sys.exit(1)

    # Set up logging level
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(cli_instance.config.log_level)

    ctx.obj['cli'] = cli_instance
    ctx.call_on_close(cli_instance.close)


@cli.command()
@click.argument('date_start', type=click.DateTime(formats=DATE_FORMATS))
@click.argument('date_end', type=click.DateTime(formats=DATE_FORMATS))
@click.option('--output', '-o', help='Write decoded transactions to this CSV file')
@click.pass_context
def periods(ctx, date_start, date_end, output):
    """Transactions between DATE_START and DATE_END (YYYY-MM-DD)"""
    cli_instance = ctx.obj['cli']
    try:
        request = Periods(_as_date(date_start), _as_date(date_end))
        cli_instance.report(cli_instance.fetch(request), output)
    except FioError as e:
        click.echo(f"✗ Error downloading transactions: {e}")
        sys.exit(1)


@cli.command()
@click.option('--output', '-o', help='Write decoded transactions to this CSV file')
@click.pass_context
def last(ctx, output):
    """Transactions since the last download"""
    cli_instance = ctx.obj['cli']
    try:
        cli_instance.report(cli_instance.fetch(Last()), output)
    except FioError as e:
        click.echo(f"✗ Error downloading transactions: {e}")
        sys.exit(1)


@cli.command()
@click.argument('date_start', type=click.DateTime(formats=DATE_FORMATS))
@click.argument('date_end', type=click.DateTime(formats=DATE_FORMATS))
@click.option('--format', 'fmt', type=click.Choice(MERCHANT_FORMAT_CHOICES), default='csv', help='Export format')
@click.option('--output', '-o', help='Output file for the raw export')
@click.pass_context
def merchant(ctx, date_start, date_end, fmt, output):
    """Card transactions of a merchant between DATE_START and DATE_END, saved as downloaded"""
    cli_instance = ctx.obj['cli']
    try:
        request = Merchant(_as_date(date_start), _as_date(date_end), fmt)
        output = output or (f"merchant_{encode_request_date(request.date_start)}_"
                            f"{encode_request_date(request.date_end)}.{request.format.value}")
        size = cli_instance.download(request, output)
        click.echo(f"✓ Merchant transactions saved: {output} ({size} bytes)")
    except FioError as e:
        click.echo(f"✗ Error downloading merchant transactions: {e}")
        sys.exit(1)


@cli.command()
@click.argument('period', required=False)
@click.option('--format', 'fmt', type=click.Choice(FORMAT_CHOICES), default='csv', help='Statement format')
@click.option('--output', '-o', help='Output file (CSV of decoded transactions for csv, raw body otherwise)')
@click.pass_context
def statement(ctx, period, fmt, output):
    """Official statement for PERIOD written as YEAR,NUMBER (default: the last one)"""
    cli_instance = ctx.obj['cli']
    try:
        if period is None:
            period = cli_instance.client.last_statement()
            click.echo(f"Last statement: {period}")
        request = FioPeriod.parse(period).to_request(fmt)
    except ValueError as e:
        click.echo(f"✗ Invalid period: {e}")
        sys.exit(1)
    except FioError as e:
        click.echo(f"✗ Error getting last statement: {e}")
        sys.exit(1)

    try:
        if request.format is ExportFormat.CSV:
            cli_instance.report(cli_instance.fetch(request), output)
        else:
            output = output or f"statement_{request.year}_{request.id}.{request.format.value}"
            size = cli_instance.download(request, output)
            click.echo(f"✓ Statement saved: {output} ({size} bytes)")
    except FioError as e:
        click.echo(f"✗ Error downloading statement: {e}")
        sys.exit(1)


@cli.command('set-last-id')
@click.argument('transaction_id')
@click.pass_context
def set_last_id(ctx, transaction_id):
    """Move the download cursor after TRANSACTION_ID"""
    cli_instance = ctx.obj['cli']
    try:
        cli_instance.client.export(SetLastId(transaction_id))
        click.echo(f"✓ Download cursor set to transaction {transaction_id}")
    except FioError as e:
        click.echo(f"✗ Error setting cursor: {e}")
        sys.exit(1)


@cli.command('set-last-date')
@click.argument('last_date', type=click.DateTime(formats=DATE_FORMATS))
@click.pass_context
def set_last_date(ctx, last_date):
    """Move the download cursor to LAST_DATE (YYYY-MM-DD)"""
    cli_instance = ctx.obj['cli']
    try:
        cli_instance.client.export(SetLastDate(_as_date(last_date)))
        click.echo(f"✓ Download cursor set to {_as_date(last_date).isoformat()}")
    except FioError as e:
        click.echo(f"✗ Error setting cursor: {e}")
        sys.exit(1)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', help='Write decoded transactions to this CSV file')
@click.option('--strict', is_flag=True, help='Fail on the first row that does not decode')
@click.pass_context
def read(ctx, file_path, output, strict):
    """Decode a previously downloaded CSV export"""
    cli_instance = ctx.obj['cli']
    try:
        response = FioResponse.from_path(file_path)
        if strict:
            info = response.read_info()
            records = list(response.records_or_raise())
            click.echo(f"✓ {len(records)} transactions for account {info.get('accountId', '?')}")
            if output:
                cli_instance.write_csv(info, records, output)
        else:
            cli_instance.report(response, output)
    except FioError as e:
        click.echo(f"✗ Error reading {file_path}: {e}")
        sys.exit(1)


@cli.command()
@click.option('--account-from', required=True, help='Payer account number')
@click.option('--currency', default='CZK', help='Currency of the payer account')
@click.option('--amount', required=True, type=float, help='Amount to pay')
@click.option('--to', 'account_to', required=True, help='Payee as ACCOUNT/BANK_CODE')
@click.option('--vs', default='', help='Variable symbol')
@click.option('--ks', default='', help='Constant symbol')
@click.option('--ss', default='', help='Specific symbol')
@click.option('--message', default='', help='Message for the recipient')
@click.option('--comment', default='', help='Comment visible to the payer only')
@click.option('--due-date', type=click.DateTime(formats=DATE_FORMATS), help='Due date (default: today)')
@click.option('--priority', is_flag=True, help='Send as priority payment')
@click.pass_context
def pay(ctx, account_from, currency, amount, account_to, vs, ks, ss, message, comment, due_date, priority):
    """Upload one domestic payment order"""
    cli_instance = ctx.obj['cli']

    account, sep, bank_code = account_to.partition('/')
    if not sep or not account or not bank_code:
        click.echo(f"✗ Invalid payee '{account_to}', expected ACCOUNT/BANK_CODE")
        sys.exit(1)

    try:
        importer = FioClientWithImport(cli_instance.client, account_from, currency)
        builder = importer.new_domestic().amount(amount).account_to(account, bank_code)
        if vs:
            builder.vs(vs)
        if ks:
            builder.ks(ks)
        if ss:
            builder.ss(ss)
        if message:
            builder.message_for_recipient(message)
        if comment:
            builder.comment(comment)
        if due_date:
            builder.date(_as_date(due_date))
        builder.payment_type(DomesticPaymentType.PRIORITY if priority else DomesticPaymentType.STANDARD)

        result = importer.import_payments(builder)
    except FioError as e:
        click.echo(f"✗ Error uploading payment: {e}")
        sys.exit(1)

    if result.accepted:
        click.echo(f"✓ Payment accepted (instruction {result.id_instruction}, status {result.status})")
    else:
        click.echo(f"✗ Payment rejected: {result.message or result.status} (error {result.error_code})")
        if result.detail:
            click.echo(f"  {result.detail}")
        sys.exit(1)


@cli.command()
@click.argument('output_path', default='fio_config.json')
@click.option('--format', type=click.Choice(['json', 'yaml']), default='json', help='Configuration file format')
@click.pass_context
def init_config(ctx, output_path, format):
    """Generate configuration template file"""

    cli_instance = ctx.obj['cli']

    # Adjust extension based on format
    if format == 'yaml' and not output_path.endswith(('.yml', '.yaml')):
        output_path = output_path.replace('.json', '.yml')
    elif format == 'json' and not output_path.endswith('.json'):
        output_path = output_path.replace('.yml', '.json').replace('.yaml', '.json')

    try:
        cli_instance.config_manager.save_config_template(output_path)
        click.echo(f"✓ Configuration template generated: {output_path}")
        click.echo("  Put your API token into the token file or set FIO_TOKEN")
    except OSError as e:
        click.echo(f"✗ Error generating config template: {str(e)}")
        sys.exit(1)


if __name__ == '__main__':
    cli()
