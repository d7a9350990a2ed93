"""CSV output of decoded transactions."""

import csv
import logging
import os
from dataclasses import fields
from datetime import datetime
from typing import Dict, Iterable, Mapping, Optional

from ..models.core import TransactionRecord


logger = logging.getLogger(__name__)


class TransactionCSVWriter:
    """Writes TransactionRecord rows as plain comma-separated CSV"""

    # One column per record field, in record order
    STANDARD_HEADERS = [f.name for f in fields(TransactionRecord)]

    def __init__(self, data_directory: str = 'data'):
        self.data_directory = data_directory

    def write_transactions(self, transactions: Iterable[TransactionRecord], output_path: str) -> int:
        """
        Write transactions to a CSV file

        Args:
            transactions: Records to write; may be a lazy iterator
            output_path: Path where CSV file should be written

        Returns:
            Number of records written
        """
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        count = 0
        with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=self.STANDARD_HEADERS)
            writer.writeheader()
            for transaction in transactions:
                writer.writerow(self._transaction_to_dict(transaction))
                count += 1

        logger.info(f"Wrote {count} transactions to {output_path}")
        return count

    def generate_output_path(self, info: Mapping[str, str], suffix: Optional[str] = None) -> str:
        """
        Output path named after the account and date range of a response

        Args:
            info: Info block of the response (accountId, dateStart, dateEnd)
            suffix: Overrides the date range part of the name
        """
        account = (info.get('accountId') or 'unknown').strip()
        if suffix is None:
            start = (info.get('dateStart') or '').strip()
            end = (info.get('dateEnd') or '').strip()
            suffix = f"{start}_{end}" if start or end else datetime.now().strftime("%Y%m%d")
        filename = f"{account}_{suffix}.csv".replace(' ', '_')
        return os.path.join(self.data_directory, filename)

    def create_unique_filename(self, base_path: str) -> str:
        """
        Create unique filename if file already exists

        Args:
            base_path: Base file path

        Returns:
            Unique file path (may have suffix added)
        """
        if not os.path.exists(base_path):
            return base_path

        path_without_ext, ext = os.path.splitext(base_path)

        counter = 1
        while counter <= 999:
            new_path = f"{path_without_ext}_{counter:03d}{ext}"
            if not os.path.exists(new_path):
                return new_path
            counter += 1

        # If we can't find a unique name, add timestamp
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{path_without_ext}_{timestamp}{ext}"

    def _transaction_to_dict(self, transaction: TransactionRecord) -> Dict[str, str]:
        row = {}
        for name in self.STANDARD_HEADERS:
            value = getattr(transaction, name)
            if value is None:
                row[name] = ''
            elif name == 'date':
                row[name] = value.isoformat()
            elif name == 'amount':
                row[name] = f"{value:.2f}"
            elif name == 'transaction_type':
                row[name] = value.label
            else:
                row[name] = str(value)
        return row
