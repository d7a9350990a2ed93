#!/usr/bin/env python3
"""
Download the previous monthly statement and print it.

The token is taken from the usual configuration (FIO_TOKEN, FIO_TOKEN_FILE or
fio_config.json); see `fio-api init-config`.
"""

import logging

from fio_api.client.http import FioClient
from fio_api.models.period import FioPeriod
from fio_api.utils.config_manager import ConfigManager


def main():
    logging.basicConfig(level=logging.INFO)
    config_manager = ConfigManager()
    config = config_manager.load_config()

    with FioClient.from_config(config, config_manager.load_token(config)) as fio:
        period = FioPeriod.current().previous()
        response = fio.export_response(period.to_request())

        info = response.read_info()
        print(f"Account number: {info.account_id()}/{info.bank_id()} ({info.currency()})")
        print(f"IBAN / BIC: {info.iban()} / {info.bic()}")
        print(f"ID: {info.id_from()} .. {info.id_to()}")
        print(f"Date: {info.date_start()} .. {info.date_end()}")
        print("-- DATA --")
        for result in response.data():
            if result.ok:
                print(result.record)
            else:
                print(f"line {result.line_number}: {result.error}")
        print(f"Balance: {info.opening_balance()} .. {info.closing_balance()}")


if __name__ == '__main__':
    main()
