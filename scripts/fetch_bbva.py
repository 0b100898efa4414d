#!/usr/bin/env python3
"""
BBVA smoke check

Logs in with the credentials from the environment (or .env), lists the
accounts and prints the movements of each one.

Usage:
    python scripts/fetch_bbva.py
    python scripts/fetch_bbva.py --from 2024-01-01 --to 2024-01-31
    python scripts/fetch_bbva.py --iban ES7601820000000000000000 --json

Environment:
    BBVA_USER, BBVA_PASSWORD: login credentials
    BBVA_PROXY_URL: optional inspection proxy (e.g. http://localhost:8888)
"""
import argparse
import json
import os
import sys
from dataclasses import asdict
from datetime import datetime

from dotenv import load_dotenv

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from domain.config import get_bbva_config
from domain.exceptions import BankAPIError, MissingCredentialsError
from infrastructure.clients import BBVABank


def _parse_date(value: str):
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_amount(money) -> str:
    if money is None:
        return "n/a"
    return f"{money.amount_cents / 100:,.2f} {money.currency}"


def main():
    parser = argparse.ArgumentParser(description="Fetch BBVA accounts and movements")
    parser.add_argument("--from", dest="start_date", type=_parse_date, default=None, help="First day (YYYY-MM-DD)")
    parser.add_argument("--to", dest="end_date", type=_parse_date, default=None, help="Last day (YYYY-MM-DD)")
    parser.add_argument("--iban", default=None, help="Only fetch movements for this IBAN")
    parser.add_argument("--json", action="store_true", help="Output raw JSON")
    args = parser.parse_args()

    load_dotenv()
    credentials = {
        "user": os.getenv("BBVA_USER", ""),
        "password": os.getenv("BBVA_PASSWORD", ""),
    }

    try:
        with BBVABank(credentials, config=get_bbva_config()) as bank:
            if args.iban:
                account = bank.account_with_iban(args.iban)
                if account is None:
                    print(f"Error: No account with IBAN {args.iban}")
                    sys.exit(1)
                accounts = [account]
            else:
                accounts = bank.accounts

            output = []
            for account in accounts:
                transactions = bank.fetch_transactions_for(
                    account, start_date=args.start_date, end_date=args.end_date
                )
                output.append((account, transactions))
    except MissingCredentialsError as e:
        print(f"Error: {e}. Set BBVA_USER and BBVA_PASSWORD.")
        sys.exit(1)
    except BankAPIError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.json:
        payload = []
        for account, transactions in output:
            payload.append({
                "account": {
                    "id": account.id,
                    "name": account.name,
                    "iban": account.iban,
                    "description": account.description,
                    "available_balance": asdict(account.available_balance) if account.available_balance is not None else None,
                    "balance": asdict(account.balance) if account.balance is not None else None,
                },
                "transactions": [
                    {
                        "id": t.id,
                        "effective_date": t.effective_date,
                        "amount": asdict(t.amount),
                        "balance": asdict(t.balance) if t.balance is not None else None,
                        "description": t.description,
                    }
                    for t in transactions
                ],
            })
        print(json.dumps(payload, indent=2, default=str))
        return

    for account, transactions in output:
        print("=" * 60)
        print(f"{account.name} ({account.iban})")
        print(f"Balance: {format_amount(account.balance)}"
              f"  Available: {format_amount(account.available_balance)}")
        print("-" * 60)
        for t in transactions:
            print(f"{t.effective_date}  {format_amount(t.amount):>16}  {t.description}")


if __name__ == "__main__":
    main()
