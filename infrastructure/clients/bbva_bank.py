"""
BBVA (Spain) adapter for the mobile banking API.

Logs in with the customer's credentials, lists the accounts and pages
through account movements, mapping the raw JSON into Account and
Transaction entities.
"""
import secrets
from datetime import date, datetime
from typing import Any, Optional

from dateutil.relativedelta import relativedelta

from domain.config import BBVAConfig, get_bbva_config
from domain.entities import Account, Credentials, Money, Transaction
from domain.interfaces import BankAdapter, LoggingPort
from domain.services import format_user
from infrastructure.clients.bbva_client import BBVAClient
from infrastructure.logging.logging_adapter import LoggingAdapter

LOGIN_ENDPOINT = "/DFAUTH/slod/DFServletXML"
SESSIONS_ENDPOINT = "/ENPP/enpp_mult_web_mobility_02/sessions/v1"
PRODUCTS_ENDPOINT = "/ENPP/enpp_mult_web_mobility_02/products/v2"
ACCOUNT_ENDPOINT = "/ENPP/enpp_mult_web_mobility_02/accounts/"

# BBVA expects a device identifier before the actual user agent; any hex string works
USER_AGENT = secrets.token_hex(64).upper() + ";iPhone;Apple;iPhone5,2;640x1136;iOS;9.3.2;WOODY;5.1.2;xhdpi"

# Identifies the consumer app (iOS vs Android)
CONSUMER_ID = "00000013"

# The API only works when these calls declare GET, even though they are sent as POST
METHOD_OVERRIDE = {"BBVA-Method": "GET"}
MOVEMENTS_HEADERS = {
    "Content-Type": "application/json; charset=UTF-8",
    **METHOD_OVERRIDE,
}

DATE_FORMAT = "%Y-%m-%d"


class BBVABank(BankAdapter):
    """
    Adapter implementing the BankAdapter protocol against BBVA's API.

    Login is deferred until the first call that needs a session. One
    instance holds one session and is not meant to be shared between threads.
    """

    def __init__(
        self,
        credentials: dict[str, str],
        config: Optional[BBVAConfig] = None,
        client: Optional[BBVAClient] = None,
        logging_port: Optional[LoggingPort] = None,
    ):
        """
        Initialize the adapter. No request is sent here.

        Args:
            credentials: Mapping with "user" and "password"
            config: Connection settings (defaults to the environment-driven config)
            client: Preconfigured BBVAClient, mainly for tests
            logging_port: Logging port for structured logging (optional)

        Raises:
            MissingCredentialsError: If user or password is missing
        """
        self._credentials = Credentials.create(credentials)
        self._user = format_user(self._credentials.user)
        self.config = config or get_bbva_config()
        self.log = (logging_port or LoggingAdapter()).bind(bank="bbva")
        self.base_url = self.config.base_url.rstrip("/")

        self.client = client or BBVAClient(self.config, log=self.log.bind(step="http"))
        self.client.add_headers(self._default_headers())

        self.session_token: Optional[str] = None
        self.logged_in = False
        self._accounts: Optional[list[Account]] = None

    @property
    def user(self) -> str:
        """Normalized identifier sent to the login endpoint."""
        return self._user

    def _default_headers(self) -> dict[str, str]:
        host = self.base_url.split("://", 1)[-1]
        return {
            "User-Agent": USER_AGENT,
            "BBVA-User-Agent": USER_AGENT,
            "Accept-Language": "spa",
            "Content-Language": "spa",
            "Accept": "application/json",
            "Accept-Charset": "UTF-8",
            "Connection": "Keep-Alive",
            "Host": host,
            "ConsumerID": CONSUMER_ID,
        }

    def login(self) -> None:
        """
        Authenticate and open an API session.

        The session token comes back as a "tsec" response header of the
        session call and is attached to every following request.
        """
        log = self.log.bind(step="login")
        log.info("login_started")

        self.client.post(
            self.base_url + LOGIN_ENDPOINT,
            endpoint="login",
            data={
                "origen": "enpp",
                "eai_tipoCP": "up",
                "eai_user": self._user,
                "eai_password": self._credentials.password,
            },
        )

        response = self.client.post(
            self.base_url + SESSIONS_ENDPOINT,
            endpoint="sessions",
            json={"consumerID": CONSUMER_ID},
            headers={"Content-Type": "application/json"},
        )

        tsec = response.headers.get("tsec")
        if tsec:
            self.session_token = tsec
            self.client.add_headers({"tsec": tsec})
        else:
            log.warning("session_token_missing", status_code=response.status_code)

        self.logged_in = True
        log.info("login_completed", session_token_present=bool(tsec))

    def ensure_session(self) -> None:
        if not self.logged_in:
            self.login()

    def fetch_accounts(self) -> list[Account]:
        """
        Fetch all the accounts of the logged-in customer.

        Returns:
            List of Account entities, in API order
        """
        self.ensure_session()
        log = self.log.bind(step="fetch_accounts")

        response = self.client.post(
            self.base_url + PRODUCTS_ENDPOINT,
            endpoint="products",
            headers=METHOD_OVERRIDE,
        )
        data = response.json()
        accounts = [self.build_account(raw) for raw in (data.get("accounts") or [])]

        log.info("accounts_fetched", account_count=len(accounts))
        self._accounts = accounts
        return accounts

    @property
    def accounts(self) -> list[Account]:
        """Accounts from the last fetch_accounts() call, fetching them on first access."""
        if self._accounts is None:
            self.fetch_accounts()
        return self._accounts

    def account_with_iban(self, iban: str) -> Optional[Account]:
        wanted = _compact_iban(iban)
        for account in self.accounts:
            if account.iban and _compact_iban(account.iban) == wanted:
                return account
        return None

    def fetch_transactions_for(
        self,
        account: Account,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """
        Fetch the movements of an account between two dates (both inclusive).

        The API accepts a toDate parameter, but the account balance after
        each movement disappears from the response when it is sent. Only
        fromDate is passed; every page is fetched and movements after
        end_date are dropped here.

        Args:
            account: Account returned by fetch_accounts()
            start_date: First day to include (default: one month ago)
            end_date: Last day to include (default: today)

        Returns:
            List of Transaction entities, in API order

        Raises:
            ValueError: If start_date is after end_date
            BankAPIError: If any page request fails
        """
        today = date.today()
        start_date = _as_date(start_date or today - relativedelta(months=1))
        end_date = _as_date(end_date or today)
        if start_date > end_date:
            raise ValueError(f"start_date {start_date} is after end_date {end_date}")

        self.ensure_session()
        log = self.log.bind(step="fetch_transactions", account_id=account.id)

        url = f"{self.base_url}{ACCOUNT_ENDPOINT}{account.id}/movements/v1"
        from_date = start_date.strftime(DATE_FORMAT)
        offset = None
        pagination_balance = None
        transactions: list[Transaction] = []
        page = 0

        while True:
            page += 1
            params = {"fromDate": from_date}
            if offset is not None:
                params["offset"] = offset
            if pagination_balance is not None:
                params["paginationBalance"] = pagination_balance

            data = self.client.post(
                url,
                endpoint="movements",
                headers=MOVEMENTS_HEADERS,
                params=params,
            ).json()

            movements = data.get("movements") or []
            if movements:
                kept = [m for m in movements if _parse_date(m["operationDate"]) <= end_date]
                transactions.extend(self.build_transaction(raw, account) for raw in kept)
                offset = data.get("offset")
                pagination_balance = data.get("paginationBalance")
                log.debug("movements_page_fetched", page=page, movements=len(movements), kept=len(kept))

            if data.get("thereAreMoreMovements") is not True:
                break

        log.info(
            "transactions_fetched",
            pages=page,
            transaction_count=len(transactions),
            start_date=from_date,
            end_date=end_date.strftime(DATE_FORMAT),
        )
        return transactions

    def build_account(self, data: dict[str, Any]) -> Account:
        currency = data.get("currency")
        return Account(
            id=str(data["id"]),
            name=data.get("name", ""),
            available_balance=_optional_money(data.get("availableBalance"), currency),
            balance=_optional_money(data.get("actualBalance"), currency),
            iban=data.get("iban", ""),
            description=f"{data.get('typeDescription', '')} {data.get('familyCode', '')}".strip(),
            bank=self,
        )

    def build_transaction(self, data: dict[str, Any], account: Account) -> Transaction:
        return Transaction(
            account=account,
            id=str(data["id"]),
            amount=transaction_amount(data),
            description=data.get("conceptDescription") or data.get("description") or "",
            effective_date=_parse_date(data["operationDate"]),
            balance=transaction_balance(data),
        )

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def transaction_amount(data: dict[str, Any]) -> Money:
    return Money.from_major(data["amount"], data.get("currency"))


def transaction_balance(data: dict[str, Any]) -> Optional[Money]:
    return _optional_money(data.get("accountBalanceAfterMovement"), data.get("currency"))


def _optional_money(value, currency: Optional[str]) -> Optional[Money]:
    # Missing balances stay None, never zero
    if value is None or value == "":
        return None
    return Money.from_major(value, currency)


def _as_date(value: date) -> date:
    # datetime is a date subclass but does not compare with plain dates
    if isinstance(value, datetime):
        return value.date()
    return value


def _parse_date(value: str) -> date:
    # operationDate may carry a time part; only the day matters
    return datetime.strptime(value[:10], DATE_FORMAT).date()


def _compact_iban(iban: str) -> str:
    return iban.replace(" ", "").upper()
