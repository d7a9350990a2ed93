#!/usr/bin/env python3
"""
Upload two domestic payments in one batch.

Usage: import_payments.py ACCOUNT_FROM CURRENCY
"""

import logging
import sys

from fio_api.client.http import FioClient, FioClientWithImport
from fio_api.payments.models import DomesticPaymentType
from fio_api.utils.config_manager import ConfigManager


def main(account_from: str, currency: str):
    logging.basicConfig(level=logging.DEBUG)
    config_manager = ConfigManager()
    config = config_manager.load_config()

    with FioClient.from_config(config, config_manager.load_token(config)) as client:
        fio = FioClientWithImport(client, account_from, currency)
        payments = [
            fio.new_domestic()
            .amount(321.45)
            .account_to("2702016516", "2010")
            .vs("123")
            .comment("T1")
            .message_for_recipient("t1"),
            fio.new_domestic()
            .amount(123.45)
            .account_to("2702016516", "2010")
            .vs("1010110101")
            .payment_type(DomesticPaymentType.STANDARD),
        ]
        result = fio.import_payments(payments)
        print(f"Status: {result.status} (error code {result.error_code})")
        print(f"Instruction: {result.id_instruction}, debit {result.sum_debit}")
        if result.message:
            print(result.message)


if __name__ == '__main__':
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)
    main(sys.argv[1], sys.argv[2])
