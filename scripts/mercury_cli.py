#!/usr/bin/env -S uv run --script
# /// script
# requires-python = ">=3.11"
# dependencies = [
#     "requests>=2.32.0",
#     "tabulate>=0.9.0",
#     "pyyaml>=6.0.1",
# ]
# ///
"""Mercury banking CLI.

Authenticates with a stored API token and exposes the Mercury REST API
(https://api.mercury.com/api/v1) as subcommands rendered as tables, JSON or YAML.

Usage examples:
    ./scripts/mercury_cli.py login --token <API_TOKEN>
    ./scripts/mercury_cli.py accounts
    ./scripts/mercury_cli.py transactions <account-id> --limit 50 --json
    ./scripts/mercury_cli.py transfer --from <id> --to <id> --amount 500 --idempotency-key <key> --dry-run
"""

from __future__ import annotations

import argparse
import json
import os
import signal
import sys
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple
from urllib.parse import urlparse

import requests
import tabulate as tabulate_module
import yaml
from tabulate import tabulate

# Prevent BrokenPipeError when piping output
signal.signal(signal.SIGPIPE, signal.SIG_DFL)
# Table cells are sized before rendering; keep their padding as given
tabulate_module.PRESERVE_WHITESPACE = True

BIN = "mercury"
VERSION = "0.1.0"
API_BASE_URL = "https://api.mercury.com/api/v1"
DEFAULT_CONFIG_DIR = Path.home() / ".mercury"
PROXY_ENV_VARS = ("HTTPS_PROXY", "HTTP_PROXY", "https_proxy", "http_proxy")
HELP_FLAGS = ("-h", "--help")
VERSION_FLAGS = ("-v", "--version")
MAX_COLUMN_WIDTH = 50
RULE = "─"
# config.json key -> MercuryConfig attribute
CONFIG_KEYS = {"defaultAccountId": "default_account_id", "apiBaseUrl": "api_base_url"}


# Configuration


@dataclass
class MercuryConfig:
    default_account_id: Optional[str] = None
    api_base_url: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "MercuryConfig":
        values = {attr: payload.get(key) for key, attr in CONFIG_KEYS.items()}
        return cls(**{k: v for k, v in values.items() if isinstance(v, str) and v})

    def to_dict(self) -> Dict[str, str]:
        data = {key: getattr(self, attr) for key, attr in CONFIG_KEYS.items()}
        return {k: v for k, v in data.items() if v}


class ConfigStore:
    """Token and settings files under a per-user directory (``~/.mercury``)."""

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            override = os.environ.get("MERCURY_CONFIG_DIR")
            config_dir = Path(override).expanduser() if override else DEFAULT_CONFIG_DIR
        self.config_dir = config_dir
        self.token_path = config_dir / "token"
        self.config_path = config_dir / "config.json"

    def _ensure_dir(self) -> None:
        if not self.config_dir.exists():
            self.config_dir.mkdir(mode=0o700, parents=True)

    def _write_private(self, path: Path, content: str) -> None:
        self._ensure_dir()
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        # os.open only applies the mode on creation
        path.chmod(0o600)

    def load_token(self) -> Optional[str]:
        if not self.token_path.exists():
            return None
        try:
            value = self.token_path.read_text(encoding="utf-8").strip()
        except OSError:
            return None
        return value or None

    def save_token(self, token: str) -> None:
        self._write_private(self.token_path, token.strip())

    def clear_token(self) -> None:
        if self.token_path.exists():
            self.token_path.unlink()

    def load_config(self) -> MercuryConfig:
        if not self.config_path.exists():
            return MercuryConfig()
        try:
            payload = json.loads(self.config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return MercuryConfig()
        if not isinstance(payload, dict):
            return MercuryConfig()
        return MercuryConfig.from_dict(payload)

    def save_config(self, config: MercuryConfig) -> None:
        self._write_private(self.config_path, json.dumps(config.to_dict(), indent=2))

    def api_base_url(self) -> str:
        return self.load_config().api_base_url or API_BASE_URL


# Errors


class CliError(Exception):
    """Usage or authentication problem reported to the user as ``Error: <message>``."""


class MercuryApiError(CliError):
    def __init__(self, status: int, body: Dict[str, Any]):
        message = body.get("message") or body.get("error") or f"HTTP {status}"
        super().__init__(str(message))
        self.status = status
        self.body = body


# HTTP client


def resolve_proxy(environ: Optional[Dict[str, str]] = None) -> Optional[Dict[str, str]]:
    """Return a requests ``proxies`` mapping from the first proxy variable set.

    A malformed URL only produces a warning; the caller then connects directly.
    """
    environ = os.environ if environ is None else environ
    proxy_url = next((environ[name] for name in PROXY_ENV_VARS if environ.get(name)), None)
    if not proxy_url:
        return None
    try:
        parsed = urlparse(proxy_url)
        if not parsed.scheme or not parsed.hostname:
            raise ValueError("expected scheme://host[:port]")
        parsed.port  # raises ValueError on a bad port
    except ValueError as exc:
        print(
            f'Warning: Invalid proxy URL "{proxy_url}": {exc}. Using direct connection.',
            file=sys.stderr,
        )
        return None
    return {"http": proxy_url, "https": proxy_url}


class MercuryClient:
    def __init__(
        self,
        base_url: str,
        token: Optional[str],
        *,
        session: Optional[requests.Session] = None,
        debug: bool = False,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.debug = debug
        self._session = session
        self._proxies: Optional[Dict[str, str]] = None
        self._proxies_resolved = False

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            # Proxy selection is done by resolve_proxy only
            self._session.trust_env = False
        return self._session

    @property
    def proxies(self) -> Optional[Dict[str, str]]:
        if not self._proxies_resolved:
            self._proxies = resolve_proxy()
            self._proxies_resolved = True
        return self._proxies

    def url_for(self, path: str) -> str:
        return path if path.startswith("http") else f"{self.base_url}{path}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        if not self.token:
            raise CliError(f"Not authenticated. Run '{BIN} login' first.")

        url = self.url_for(path)
        req_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if headers:
            req_headers.update(headers)
        req_headers["Authorization"] = f"Bearer {self.token}"

        if self.debug:
            print(
                f"HTTP {method} {url} params={params} json_body_present={json_body is not None}",
                file=sys.stderr,
            )
        resp = self.session.request(
            method,
            url,
            params=params,
            json=json_body,
            headers=req_headers,
            proxies=self.proxies,
        )

        if not 200 <= resp.status_code < 300:
            raise MercuryApiError(resp.status_code, _error_body(resp))
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()


def _error_body(resp: requests.Response) -> Dict[str, Any]:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        return body
    return {
        "error": f"HTTP {resp.status_code}",
        "message": f"HTTP {resp.status_code} {resp.reason}",
    }


# Output


OutputFormat = str  # "table" | "json" | "yaml"


@dataclass
class Column:
    key: str
    header: str
    width: Optional[int] = None
    format: Optional[Callable[[Any], str]] = None

    def render(self, row: Dict[str, Any]) -> str:
        value = row.get(self.key)
        if self.format is not None:
            return self.format(value)
        return "-" if value is None else str(value)


def parse_output_flag(args: Sequence[str]) -> Tuple[OutputFormat, List[str]]:
    output_format = "table"
    remaining: List[str] = []
    for arg in args:
        if arg == "--json":
            output_format = "json"
        elif arg == "--yaml":
            output_format = "yaml"
        else:
            remaining.append(arg)
    return output_format, remaining


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def print_yaml(data: Any) -> None:
    print(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), end="")


def print_data(data: Any, output_format: OutputFormat) -> None:
    if output_format == "yaml":
        print_yaml(data)
    else:
        print_json(data)


def print_table(rows: List[Dict[str, Any]], columns: List[Column]) -> None:
    if not rows:
        print("No results.")
        return

    # One line per record
    cells = [[" ".join(col.render(row).splitlines()) for col in columns] for row in rows]
    widths = []
    for i, col in enumerate(columns):
        if col.width is not None:
            widths.append(col.width)
        else:
            longest = max(len(line[i]) for line in cells)
            widths.append(min(max(len(col.header), longest), MAX_COLUMN_WIDTH))

    # The rule row pins each column to its width; tabulate pads the rest
    table = [[col.header[:w] for col, w in zip(columns, widths)]]
    table.append([RULE * w for w in widths])
    table.extend([value[:w] for value, w in zip(line, widths)] for line in cells)
    print(tabulate(table, tablefmt="plain", disable_numparse=True))


def print_details(title: str, fields: Iterable[Tuple[str, Any]]) -> None:
    print(title)
    print(RULE * len(title))
    rows = [[f"{label}:" if label else "", "-" if value is None else str(value)] for label, value in fields]
    print(tabulate(rows, tablefmt="plain", disable_numparse=True))


def format_currency(cents: Optional[float]) -> str:
    if cents is None:
        return "-"
    dollars = cents / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def _parse_iso(value: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed


def _short_date(value: date) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def format_date(iso_string: Optional[str]) -> str:
    if not iso_string:
        return "-"
    parsed = _parse_iso(iso_string)
    return _short_date(parsed) if parsed else iso_string


def format_datetime(iso_string: Optional[str]) -> str:
    if not iso_string:
        return "-"
    parsed = _parse_iso(iso_string)
    if parsed is None:
        return iso_string
    return f"{_short_date(parsed)}, {parsed:%I:%M %p}"


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    if max_len < 3:
        return "." * max_len
    return text[: max_len - 3] + "..."


def truncated(max_len: int) -> Callable[[Any], str]:
    """Column formatter: ``-`` for missing values, else the truncated text."""
    return lambda value: "-" if value is None else truncate(str(value), max_len)


# Flag parsing


def _attr_name(flag: str) -> str:
    return flag.lstrip("-").replace("-", "_")


def parse_flags(
    args: Sequence[str],
    value_flags: Iterable[str] = (),
    bool_flags: Iterable[str] = (),
    multi_flags: Iterable[str] = (),
) -> Tuple[argparse.Namespace, List[str]]:
    """Parse ``--flag value`` style options.

    Every declared flag is present on the namespace (``None``, ``False`` or an
    empty list when not given). Tokens that don't start with ``-`` are returned
    as positionals.
    """
    value_flags, bool_flags, multi_flags = set(value_flags), set(bool_flags), set(multi_flags)
    options = argparse.Namespace()
    for flag in value_flags:
        setattr(options, _attr_name(flag), None)
    for flag in bool_flags:
        setattr(options, _attr_name(flag), False)
    for flag in multi_flags:
        setattr(options, _attr_name(flag), [])

    positionals: List[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in bool_flags:
            setattr(options, _attr_name(arg), True)
        elif arg in value_flags or arg in multi_flags:
            value = args[i + 1] if i + 1 < len(args) else None
            if not value:
                raise CliError(f"{arg} requires a value")
            if arg in multi_flags:
                getattr(options, _attr_name(arg)).append(value)
            else:
                setattr(options, _attr_name(arg), value)
            i += 1
        elif arg.startswith("-"):
            raise CliError(f"Unknown option: {arg}")
        else:
            positionals.append(arg)
        i += 1
    return options, positionals


def reject_positionals(positionals: Sequence[str]) -> None:
    if positionals:
        raise CliError(f"Unexpected arguments: {' '.join(positionals)}")


def parse_int(value: Optional[str], flag: str) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise CliError(f"{flag} must be an integer") from None


def parse_amount(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        amount = int(value)
    except ValueError:
        amount = 0
    if amount <= 0:
        raise CliError("--amount must be a positive integer (cents)")
    return amount


def require(options: argparse.Namespace, *flags: str) -> None:
    for flag in flags:
        if getattr(options, _attr_name(flag)) in (None, ""):
            raise CliError(f"Missing required {flag}")


def query_params(**params: Any) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if v not in (None, "")}


def print_dry_run(method: str, path: str, body: Optional[Dict[str, Any]] = None) -> None:
    preview: Dict[str, Any] = {"method": method, "path": path}
    if body is not None:
        preview["body"] = body
    print_json(preview)


# Command registry


@dataclass
class CommandContext:
    client: MercuryClient
    store: ConfigStore
    config: MercuryConfig = field(default_factory=MercuryConfig)


Handler = Callable[[List[str], CommandContext], None]


@dataclass(frozen=True)
class Command:
    name: str
    description: str
    usage: str
    handler: Handler
    aliases: Tuple[str, ...] = ()


Registry = Dict[str, Command]


def build_registry(commands: Iterable[Command]) -> Registry:
    registry: Registry = {}
    for command in commands:
        for key in (command.name, *command.aliases):
            if key in registry:
                raise ValueError(f"Duplicate command name or alias: {key}")
            registry[key] = command
    return registry


def create_context(store: Optional[ConfigStore] = None) -> CommandContext:
    store = store or ConfigStore()
    config = store.load_config()
    client = MercuryClient(
        config.api_base_url or API_BASE_URL,
        store.load_token(),
        debug=os.environ.get("MERCURY_DEBUG", "").lower() in ("1", "true", "yes"),
    )
    return CommandContext(client=client, store=store, config=config)


def account_or_default(candidate: Optional[str], context: CommandContext, usage: str) -> str:
    account_id = candidate or context.config.default_account_id
    if not account_id:
        raise CliError(f"Missing account ID. Usage: {usage}")
    return account_id


# Handlers: auth and local state


LOGIN_USAGE = f"""{BIN} login --token <API_TOKEN>
{BIN} login --token-stdin"""


def read_token_from_stdin() -> str:
    return sys.stdin.read().strip()


def handle_login(args: List[str], context: CommandContext) -> None:
    options, positionals = parse_flags(args, value_flags=["--token"], bool_flags=["--token-stdin"])
    reject_positionals(positionals)
    if options.token and options.token_stdin:
        raise CliError("Use either --token or --token-stdin, not both.")

    token = read_token_from_stdin() if options.token_stdin else options.token
    if token is None or (options.token_stdin and not token):
        if context.store.load_token():
            print(f"Already authenticated. Use '{BIN} logout' to disconnect.")
            return
        raise CliError("Missing token. Use --token <TOKEN> or --token-stdin.")

    token = token.strip()
    if not token:
        raise CliError("Token cannot be empty.")
    context.store.save_token(token)
    print(f"Authenticated successfully. Token saved to {context.store.token_path}")


def handle_logout(args: List[str], context: CommandContext) -> None:
    if not context.store.load_token():
        print("Not currently authenticated.")
        return
    context.store.clear_token()
    print(f"Logged out. Token removed from {context.store.token_path}")


def mask_token(token: str) -> str:
    if len(token) <= 14:
        return token[:2] + "..."
    return token[:10] + "..." + token[-4:]


def handle_status(args: List[str], context: CommandContext) -> None:
    token = context.store.load_token()
    config = context.store.load_config()
    print("Mercury CLI Status")
    print(RULE * 18)
    print(f"Authenticated: {'Yes' if token else 'No'}")
    if token:
        print(f"Token: {mask_token(token)}")
    print(f"API Base URL: {context.store.api_base_url()}")
    if config.default_account_id:
        print(f"Default Account: {config.default_account_id}")


def handle_version(args: List[str], context: Optional[CommandContext]) -> None:
    print(f"mercury-cli v{VERSION}")


CONFIG_USAGE = f"""{BIN} config
{BIN} config set <defaultAccountId|apiBaseUrl> <value>
{BIN} config unset <defaultAccountId|apiBaseUrl>
{BIN} config --json"""


def handle_config(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    subcommand = remaining[0] if remaining else "show"
    store = context.store
    config = store.load_config()

    if subcommand == "show":
        reject_positionals(remaining[1:])
        if output_format != "table":
            print_data(config.to_dict(), output_format)
            return
        print_details(
            "Mercury CLI Config",
            [
                ("defaultAccountId", config.default_account_id),
                ("apiBaseUrl", config.api_base_url or f"{API_BASE_URL} (default)"),
            ],
        )
        return

    if subcommand not in ("set", "unset"):
        raise CliError(f"Unknown subcommand: {subcommand}. Use 'set' or 'unset'.")
    expected, usage_line = (3, 1) if subcommand == "set" else (2, 2)
    if len(remaining) != expected:
        raise CliError(f"Usage: {CONFIG_USAGE.splitlines()[usage_line]}")
    key = remaining[1]
    if key not in CONFIG_KEYS:
        raise CliError(f"Unknown config key: {key}. Use one of: {', '.join(CONFIG_KEYS)}")

    value = remaining[2] if subcommand == "set" else None
    setattr(config, CONFIG_KEYS[key], value)
    store.save_config(config)
    if value is None:
        print(f"Removed {key} from {store.config_path}")
    else:
        print(f"Set {key} = {value} in {store.config_path}")


# Handlers: accounts


ACCOUNTS_USAGE = f"""{BIN} accounts
{BIN} accounts list
{BIN} accounts get <account-id>
{BIN} accounts --json"""


def handle_accounts(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    subcommand = remaining[0] if remaining else "list"

    if subcommand == "list":
        reject_positionals(remaining[1:])
        list_accounts(context, output_format)
    elif subcommand == "get":
        if len(remaining) < 2:
            raise CliError(f"Missing account ID. Usage: {BIN} accounts get <account-id>")
        reject_positionals(remaining[2:])
        get_account(context, remaining[1], output_format)
    else:
        raise CliError(f"Unknown subcommand: {subcommand}. Use 'list' or 'get'.")


def list_accounts(context: CommandContext, output_format: OutputFormat) -> None:
    accounts = context.client.request("GET", "/accounts")["accounts"]
    if output_format != "table":
        print_data(accounts, output_format)
        return
    print_table(
        accounts,
        [
            Column("id", "ID", 36),
            Column("name", "Name", 20),
            Column("type", "Type", 12),
            Column("status", "Status", 10),
            Column("availableBalance", "Available", 15, format_currency),
            Column("currentBalance", "Current", 15, format_currency),
        ],
    )


def get_account(context: CommandContext, account_id: str, output_format: OutputFormat) -> None:
    account = context.client.request("GET", f"/account/{account_id}")
    if output_format != "table":
        print_data(account, output_format)
        return
    print_details(
        "Account Details",
        [
            ("ID", account.get("id")),
            ("Name", account.get("name")),
            ("Type", account.get("type")),
            ("Status", account.get("status")),
            ("Account Number", account.get("accountNumber")),
            ("Routing Number", account.get("routingNumber")),
            ("Available", format_currency(account.get("availableBalance"))),
            ("Current", format_currency(account.get("currentBalance"))),
            ("Created", format_date(account.get("createdAt"))),
        ],
    )


# Handlers: transactions


TRANSACTIONS_USAGE = f"""{BIN} transactions [list] <account-id>
{BIN} transactions <account-id> --limit 50
{BIN} transactions <account-id> --status pending
{BIN} transactions <account-id> --start 2024-01-01 --end 2024-12-31
{BIN} transactions get <account-id> <transaction-id>
{BIN} transactions send <account-id> --recipient <id> --amount <cents> --idempotency-key <key> [--note <text>] [--method ach|wire] [--dry-run]
{BIN} transactions --json"""

TRANSFER_METHODS = {
    "ach": "transactions/external",
    "wire": "transactions/external-domestic-wire",
}


def handle_transactions(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    first = remaining[0] if remaining else None

    if first == "get":
        if len(remaining) < 3:
            raise CliError(f"Usage: {BIN} transactions get <account-id> <transaction-id>")
        reject_positionals(remaining[3:])
        get_transaction(context, remaining[1], remaining[2], output_format)
        return

    if first == "send":
        if len(remaining) < 2 or remaining[1].startswith("-"):
            raise CliError(
                f"Usage: {BIN} transactions send <account-id> --recipient <id> --amount <cents> "
                "--idempotency-key <key>"
            )
        send_transaction(context, remaining[1], remaining[2:], output_format)
        return

    if first == "list":
        remaining = remaining[1:]
        first = remaining[0] if remaining else None
    if first is not None and not first.startswith("-"):
        account_id, flag_args = first, remaining[1:]
    else:
        account_id, flag_args = None, remaining
    account_id = account_or_default(account_id, context, f"{BIN} transactions <account-id>")
    list_transactions(context, account_id, flag_args, output_format)


def list_transactions(
    context: CommandContext, account_id: str, args: List[str], output_format: OutputFormat
) -> None:
    options, positionals = parse_flags(
        args, value_flags=["--limit", "--offset", "--status", "--start", "--end", "--search"]
    )
    reject_positionals(positionals)
    params = query_params(
        limit=parse_int(options.limit, "--limit"),
        offset=parse_int(options.offset, "--offset"),
        status=options.status,
        start=options.start,
        end=options.end,
        search=options.search,
    )
    response = context.client.request("GET", f"/account/{account_id}/transactions", params=params or None)

    if output_format != "table":
        print_data(response, output_format)
        return

    print(f"Transactions (total: {response.get('total', len(response['transactions']))})")
    print()
    print_table(
        response["transactions"],
        [
            Column("id", "ID", 36),
            Column("kind", "Type", 18),
            Column("status", "Status", 10),
            Column("amount", "Amount", 12, format_currency),
            Column("counterpartyName", "Counterparty", 25, lambda v: truncate(v or "-", 25)),
            Column("postedAt", "Posted", 18, format_datetime),
        ],
    )


def get_transaction(context: CommandContext, account_id: str, tx_id: str, output_format: OutputFormat) -> None:
    tx = context.client.request("GET", f"/account/{account_id}/transaction/{tx_id}")
    if output_format != "table":
        print_data(tx, output_format)
        return
    print_details(
        "Transaction Details",
        [
            ("ID", tx.get("id")),
            ("Type", tx.get("kind")),
            ("Status", tx.get("status")),
            ("Amount", format_currency(tx.get("amount"))),
            ("Counterparty", tx.get("counterpartyName")),
            ("Counterparty ID", tx.get("counterpartyId")),
            ("Description", tx.get("description")),
            ("Note", tx.get("note")),
            ("External Memo", tx.get("externalMemo")),
            ("Created", format_datetime(tx.get("createdAt"))),
            ("Posted", format_datetime(tx.get("postedAt"))),
            ("Est. Delivery", format_datetime(tx.get("estimatedDeliveryDate"))),
        ],
    )


def send_transaction(context: CommandContext, account_id: str, args: List[str], output_format: OutputFormat) -> None:
    options, positionals = parse_flags(
        args,
        value_flags=["--recipient", "--amount", "--idempotency-key", "--note", "--method"],
        bool_flags=["--dry-run"],
    )
    reject_positionals(positionals)
    amount = parse_amount(options.amount)
    method = options.method or "ach"
    if method not in TRANSFER_METHODS:
        raise CliError("--method must be 'ach' or 'wire'")
    require(options, "--recipient", "--amount", "--idempotency-key")

    body: Dict[str, Any] = {
        "recipientId": options.recipient,
        "amount": amount,
        "idempotencyKey": options.idempotency_key,
    }
    if options.note:
        body["note"] = options.note
    path = f"/account/{account_id}/{TRANSFER_METHODS[method]}"

    if options.dry_run:
        print_dry_run("POST", path, body)
        return

    tx = context.client.request("POST", path, json_body=body)
    if output_format != "table":
        print_data(tx, output_format)
        return
    print_details(
        "Transaction Created",
        [
            ("ID", tx.get("id")),
            ("Status", tx.get("status")),
            ("Amount", format_currency(tx.get("amount"))),
            ("Method", method.upper()),
        ],
    )


# Handlers: recipients


RECIPIENTS_USAGE = f"""{BIN} recipients
{BIN} recipients list [--limit N] [--offset N]
{BIN} recipients get <recipient-id>
{BIN} recipients add --name <name> --account <account-num> --routing <routing-num> [options] [--dry-run]
{BIN} recipients delete <recipient-id> [--dry-run]
{BIN} recipients --json"""

RECIPIENT_ADD_FLAGS = [
    "--name",
    "--account",
    "--routing",
    "--bank-name",
    "--account-type",
    "--address",
    "--city",
    "--region",
    "--postal-code",
    "--country",
]


def handle_recipients(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    subcommand = remaining[0] if remaining else "list"

    if subcommand == "list":
        list_recipients(context, remaining[1:], output_format)
    elif subcommand == "get":
        if len(remaining) < 2:
            raise CliError(f"Missing recipient ID. Usage: {BIN} recipients get <recipient-id>")
        reject_positionals(remaining[2:])
        get_recipient(context, remaining[1], output_format)
    elif subcommand == "add":
        add_recipient(context, remaining[1:], output_format)
    elif subcommand == "delete":
        options, positionals = parse_flags(remaining[1:], bool_flags=["--dry-run"])
        if not positionals:
            raise CliError(f"Missing recipient ID. Usage: {BIN} recipients delete <recipient-id>")
        reject_positionals(positionals[1:])
        delete_recipient(context, positionals[0], dry_run=options.dry_run)
    else:
        raise CliError(f"Unknown subcommand: {subcommand}. Use 'list', 'get', 'add', or 'delete'.")


def list_recipients(context: CommandContext, args: List[str], output_format: OutputFormat) -> None:
    options, positionals = parse_flags(args, value_flags=["--limit", "--offset"])
    reject_positionals(positionals)
    params = query_params(
        limit=parse_int(options.limit, "--limit"),
        offset=parse_int(options.offset, "--offset"),
    )
    recipients = context.client.request("GET", "/recipients", params=params or None)["recipients"]

    if output_format != "table":
        print_data(recipients, output_format)
        return

    def account_suffix(info: Optional[Dict[str, Any]]) -> str:
        number = (info or {}).get("accountNumber")
        return f"...{number[-4:]}" if number else "-"

    def first_email(emails: Optional[List[str]]) -> str:
        return truncate(emails[0], 30) if emails else "-"

    print_table(
        recipients,
        [
            Column("id", "ID", 36),
            Column("name", "Name", 30),
            Column("electronicRoutingInfo", "Account", 15, account_suffix),
            Column("emails", "Email", 30, first_email),
        ],
    )


def _address_lines(address: Dict[str, Any]) -> List[Tuple[str, Any]]:
    lines: List[Tuple[str, Any]] = [("Address", address.get("address1"))]
    if address.get("address2"):
        lines.append(("", address["address2"]))
    region = " ".join(part for part in (address.get("region"), address.get("postalCode")) if part)
    city_line = ", ".join(part for part in (address.get("city"), region) if part)
    lines.append(("", city_line or None))
    lines.append(("", address.get("country")))
    return lines


def get_recipient(context: CommandContext, recipient_id: str, output_format: OutputFormat) -> None:
    recipient = context.client.request("GET", f"/recipient/{recipient_id}")
    if output_format != "table":
        print_data(recipient, output_format)
        return

    fields: List[Tuple[str, Any]] = [("ID", recipient.get("id")), ("Name", recipient.get("name"))]
    if recipient.get("emails"):
        fields.append(("Emails", ", ".join(recipient["emails"])))
    info = recipient.get("electronicRoutingInfo")
    if info:
        fields.append(("Account Number", info.get("accountNumber")))
        fields.append(("Routing Number", info.get("routingNumber")))
        if info.get("bankName"):
            fields.append(("Bank Name", info["bankName"]))
        if info.get("electronicAccountType"):
            fields.append(("Account Type", info["electronicAccountType"]))
    if recipient.get("address"):
        fields.extend(_address_lines(recipient["address"]))
    print_details("Recipient Details", fields)


def add_recipient(context: CommandContext, args: List[str], output_format: OutputFormat) -> None:
    options, positionals = parse_flags(
        args, value_flags=RECIPIENT_ADD_FLAGS, multi_flags=["--email"], bool_flags=["--dry-run"]
    )
    reject_positionals(positionals)
    require(options, "--name", "--account", "--routing")

    routing_info = {"accountNumber": options.account, "routingNumber": options.routing}
    if options.bank_name:
        routing_info["bankName"] = options.bank_name
    if options.account_type:
        routing_info["electronicAccountType"] = options.account_type
    body: Dict[str, Any] = {"name": options.name, "electronicRoutingInfo": routing_info}
    if options.email:
        body["emails"] = options.email

    address = {
        "address1": options.address,
        "city": options.city,
        "region": options.region,
        "postalCode": options.postal_code,
        "country": options.country,
    }
    # Partial addresses are dropped
    if all(address.values()):
        body["address"] = address

    if options.dry_run:
        print_dry_run("POST", "/recipients", body)
        return

    recipient = context.client.request("POST", "/recipients", json_body=body)
    if output_format != "table":
        print_data(recipient, output_format)
        return
    print_details("Recipient Created", [("ID", recipient.get("id")), ("Name", recipient.get("name"))])


def delete_recipient(context: CommandContext, recipient_id: str, *, dry_run: bool = False) -> None:
    if dry_run:
        print(f"[dry-run] Would delete recipient {recipient_id}")
        return
    context.client.request("DELETE", f"/recipient/{recipient_id}")
    print(f"Recipient {recipient_id} deleted.")


# Handlers: cards and statements


CARDS_USAGE = f"""{BIN} cards [list] <account-id>
{BIN} cards --json"""


def handle_cards(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    _, positionals = parse_flags(remaining)
    if positionals[:1] == ["list"]:
        positionals = positionals[1:]
    reject_positionals(positionals[1:])
    account_id = account_or_default(positionals[0] if positionals else None, context, f"{BIN} cards <account-id>")

    cards = context.client.request("GET", f"/account/{account_id}/cards")["cards"]
    if output_format != "table":
        print_data(cards, output_format)
        return
    if not cards:
        print("No cards found for this account.")
        return
    print_table(
        cards,
        [
            Column("cardId", "Card ID", 36),
            Column("name", "Name", 25),
            Column("lastFourDigits", "Last 4", 8),
            Column("status", "Status", 12),
            Column("expirationDate", "Expires", 10),
            Column("createdAt", "Created", 18, format_datetime),
        ],
    )


STATEMENTS_USAGE = f"""{BIN} statements [list] <account-id>
{BIN} statements get <account-id> <statement-id>
{BIN} statements --json"""


def handle_statements(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    _, positionals = parse_flags(remaining)

    if positionals and positionals[0] == "get":
        if len(positionals) < 3:
            raise CliError(f"Usage: {BIN} statements get <account-id> <statement-id>")
        reject_positionals(positionals[3:])
        get_statement(context, positionals[1], positionals[2], output_format)
        return

    if positionals[:1] == ["list"]:
        positionals = positionals[1:]
    reject_positionals(positionals[1:])
    account_id = account_or_default(
        positionals[0] if positionals else None, context, f"{BIN} statements <account-id>"
    )
    list_statements(context, account_id, output_format)


def list_statements(context: CommandContext, account_id: str, output_format: OutputFormat) -> None:
    statements = context.client.request("GET", f"/account/{account_id}/statements")["statements"]
    if output_format != "table":
        print_data(statements, output_format)
        return
    if not statements:
        print("No statements found for this account.")
        return
    print_table(
        statements,
        [
            Column("id", "Statement ID", 36),
            Column("period", "Period", 15),
            Column("startDate", "Start", 12, format_date),
            Column("endDate", "End", 12, format_date),
            Column("createdAt", "Created", 12, format_date),
        ],
    )


def get_statement(context: CommandContext, account_id: str, statement_id: str, output_format: OutputFormat) -> None:
    statement = context.client.request("GET", f"/account/{account_id}/statements/{statement_id}")
    if output_format != "table":
        print_data(statement, output_format)
        return
    print_details(
        "Statement Details",
        [
            ("ID", statement.get("id")),
            ("Period", statement.get("period")),
            ("Start Date", format_date(statement.get("startDate"))),
            ("End Date", format_date(statement.get("endDate"))),
            ("Created", format_date(statement.get("createdAt"))),
        ],
    )


# Handlers: webhooks


WEBHOOKS_USAGE = f"""{BIN} webhooks
{BIN} webhooks list
{BIN} webhooks get <webhook-id>
{BIN} webhooks create --url <url> [--events <event1,event2>] [--secret <secret>] [--dry-run]
{BIN} webhooks update <webhook-id> [--url <url>] [--events <events>] [--status <status>] [--dry-run]
{BIN} webhooks delete <webhook-id> [--dry-run]
{BIN} webhooks verify <webhook-id>
{BIN} webhooks --json"""


def _split_events(value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    return [event.strip() for event in value.split(",")]


def _webhook_id(remaining: List[str]) -> str:
    if len(remaining) < 2 or remaining[1].startswith("-"):
        raise CliError("Missing webhook ID")
    return remaining[1]


def handle_webhooks(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    subcommand = remaining[0] if remaining else "list"

    if subcommand == "list":
        reject_positionals(remaining[1:])
        list_webhooks(context, output_format)
    elif subcommand == "get":
        webhook_id = _webhook_id(remaining)
        reject_positionals(remaining[2:])
        get_webhook(context, webhook_id, output_format)
    elif subcommand == "create":
        create_webhook(context, remaining[1:], output_format)
    elif subcommand == "update":
        update_webhook(context, _webhook_id(remaining), remaining[2:], output_format)
    elif subcommand == "delete":
        webhook_id = _webhook_id(remaining)
        options, positionals = parse_flags(remaining[2:], bool_flags=["--dry-run"])
        reject_positionals(positionals)
        delete_webhook(context, webhook_id, dry_run=options.dry_run)
    elif subcommand == "verify":
        webhook_id = _webhook_id(remaining)
        reject_positionals(remaining[2:])
        verify_webhook(context, webhook_id)
    else:
        raise CliError(f"Unknown subcommand: {subcommand}")


def _print_webhook_summary(title: str, webhook: Dict[str, Any]) -> None:
    print_details(title, [("ID", webhook.get("id")), ("URL", webhook.get("url")), ("Status", webhook.get("status"))])


def list_webhooks(context: CommandContext, output_format: OutputFormat) -> None:
    webhooks = context.client.request("GET", "/webhooks")["webhooks"]
    if output_format != "table":
        print_data(webhooks, output_format)
        return
    if not webhooks:
        print("No webhooks configured.")
        return
    print_table(
        webhooks,
        [
            Column("id", "ID", 36),
            Column("url", "URL", 40, truncated(40)),
            Column("status", "Status", 10),
            Column("events", "Events", 30, lambda v: truncate(", ".join(v), 30) if v else "all"),
        ],
    )


def get_webhook(context: CommandContext, webhook_id: str, output_format: OutputFormat) -> None:
    webhook = context.client.request("GET", f"/webhooks/{webhook_id}")
    if output_format != "table":
        print_data(webhook, output_format)
        return
    fields: List[Tuple[str, Any]] = [
        ("ID", webhook.get("id")),
        ("URL", webhook.get("url")),
        ("Status", webhook.get("status")),
        ("Events", ", ".join(webhook["events"]) if webhook.get("events") else "all"),
    ]
    if webhook.get("secret"):
        fields.append(("Secret", webhook["secret"][:8] + "..."))
    print_details("Webhook Details", fields)


def create_webhook(context: CommandContext, args: List[str], output_format: OutputFormat) -> None:
    options, positionals = parse_flags(
        args, value_flags=["--url", "--events", "--secret"], bool_flags=["--dry-run"]
    )
    reject_positionals(positionals)
    require(options, "--url")
    body: Dict[str, Any] = {"url": options.url}
    if options.events:
        body["events"] = _split_events(options.events)
    if options.secret:
        body["secret"] = options.secret

    if options.dry_run:
        print_dry_run("POST", "/webhooks", body)
        return

    webhook = context.client.request("POST", "/webhooks", json_body=body)
    if output_format != "table":
        print_data(webhook, output_format)
        return
    _print_webhook_summary("Webhook Created", webhook)


def update_webhook(context: CommandContext, webhook_id: str, args: List[str], output_format: OutputFormat) -> None:
    options, positionals = parse_flags(
        args, value_flags=["--url", "--events", "--status"], bool_flags=["--dry-run"]
    )
    reject_positionals(positionals)
    body = query_params(url=options.url, events=_split_events(options.events), status=options.status)
    path = f"/webhooks/{webhook_id}"

    if options.dry_run:
        print_dry_run("PUT", path, body)
        return

    webhook = context.client.request("PUT", path, json_body=body)
    if output_format != "table":
        print_data(webhook, output_format)
        return
    _print_webhook_summary("Webhook Updated", webhook)


def delete_webhook(context: CommandContext, webhook_id: str, *, dry_run: bool = False) -> None:
    if dry_run:
        print(f"[dry-run] Would delete webhook {webhook_id}")
        return
    context.client.request("DELETE", f"/webhooks/{webhook_id}")
    print(f"Webhook {webhook_id} deleted.")


def verify_webhook(context: CommandContext, webhook_id: str) -> None:
    context.client.request("POST", f"/webhooks/{webhook_id}/verify")
    print(f"Webhook {webhook_id} verification triggered.")


# Handlers: events, users, organization, categories


EVENTS_USAGE = f"""{BIN} events
{BIN} events list [--limit N] [--offset N] [--type <type>]
{BIN} events get <event-id>
{BIN} events --json"""


def handle_events(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    subcommand = remaining[0] if remaining else "list"

    if subcommand == "list":
        list_events(context, remaining[1:], output_format)
    elif subcommand == "get":
        if len(remaining) < 2:
            raise CliError("Missing event ID")
        reject_positionals(remaining[2:])
        get_event(context, remaining[1], output_format)
    elif subcommand.startswith("-"):
        # Flags without an explicit "list"
        list_events(context, remaining, output_format)
    else:
        reject_positionals(remaining[1:])
        get_event(context, subcommand, output_format)


def list_events(context: CommandContext, args: List[str], output_format: OutputFormat) -> None:
    options, positionals = parse_flags(args, value_flags=["--limit", "--offset", "--type"])
    reject_positionals(positionals)
    params = query_params(
        limit=parse_int(options.limit, "--limit"),
        offset=parse_int(options.offset, "--offset"),
        type=options.type,
    )
    events = context.client.request("GET", "/events", params=params or None)["events"]
    if output_format != "table":
        print_data(events, output_format)
        return
    if not events:
        print("No events found.")
        return
    print_table(
        events,
        [
            Column("id", "Event ID", 36),
            Column("resourceType", "Resource", 18),
            Column("operationType", "Operation", 10),
            Column("resourceId", "Resource ID", 20, truncated(20)),
            Column("occurredAt", "Occurred", 18, format_datetime),
        ],
    )


def get_event(context: CommandContext, event_id: str, output_format: OutputFormat) -> None:
    event = context.client.request("GET", f"/events/{event_id}")
    if output_format != "table":
        print_data(event, output_format)
        return
    fields: List[Tuple[str, Any]] = [
        ("ID", event.get("id")),
        ("Resource Type", event.get("resourceType")),
        ("Resource ID", event.get("resourceId")),
        ("Operation", event.get("operationType")),
        ("Occurred At", format_datetime(event.get("occurredAt"))),
    ]
    if event.get("changedPaths"):
        fields.append(("Changed Paths", ", ".join(event["changedPaths"])))
    print_details("Event Details", fields)


USERS_USAGE = f"""{BIN} users
{BIN} users list
{BIN} users get <user-id>
{BIN} users --json"""


def handle_users(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    subcommand = remaining[0] if remaining else "list"

    if subcommand == "list":
        reject_positionals(remaining[1:])
        list_users(context, output_format)
    elif subcommand == "get":
        if len(remaining) < 2:
            raise CliError("Missing user ID")
        reject_positionals(remaining[2:])
        get_user(context, remaining[1], output_format)
    elif subcommand.startswith("-"):
        raise CliError(f"Unknown option: {subcommand}")
    else:
        reject_positionals(remaining[1:])
        get_user(context, subcommand, output_format)


def list_users(context: CommandContext, output_format: OutputFormat) -> None:
    users = context.client.request("GET", "/users")["users"]
    if output_format != "table":
        print_data(users, output_format)
        return
    print_table(
        users,
        [
            Column("id", "ID", 36),
            Column("firstName", "First Name", 15),
            Column("lastName", "Last Name", 15),
            Column("email", "Email", 30),
            Column("role", "Role", 12),
            Column("status", "Status", 10),
        ],
    )


def get_user(context: CommandContext, user_id: str, output_format: OutputFormat) -> None:
    user = context.client.request("GET", f"/users/{user_id}")
    if output_format != "table":
        print_data(user, output_format)
        return
    fields: List[Tuple[str, Any]] = [
        ("ID", user.get("id")),
        ("Name", " ".join(part for part in (user.get("firstName"), user.get("lastName")) if part) or None),
        ("Email", user.get("email")),
    ]
    if user.get("role"):
        fields.append(("Role", user["role"]))
    if user.get("status"):
        fields.append(("Status", user["status"]))
    print_details("User Details", fields)


ORGANIZATION_USAGE = f"""{BIN} organization
{BIN} org
{BIN} organization --json"""


def handle_organization(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    _, positionals = parse_flags(remaining)
    reject_positionals(positionals)

    org = context.client.request("GET", "/organization")
    if output_format != "table":
        print_data(org, output_format)
        return
    fields: List[Tuple[str, Any]] = [("ID", org.get("id")), ("Legal Name", org.get("legalBusinessName"))]
    if org.get("ein"):
        fields.append(("EIN", org["ein"]))
    if org.get("dbas"):
        fields.append(("DBAs", ", ".join(org["dbas"])))
    if org.get("address"):
        fields.extend(_address_lines(org["address"]))
    print_details("Organization Details", fields)


CATEGORIES_USAGE = f"""{BIN} categories
{BIN} categories --json"""


def handle_categories(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    _, positionals = parse_flags(remaining)
    reject_positionals(positionals)

    categories = context.client.request("GET", "/categories")["categories"]
    if output_format != "table":
        print_data(categories, output_format)
        return
    print_table(
        categories,
        [
            Column("id", "ID", 36),
            Column("name", "Name", 30),
            Column("type", "Type", 15),
            Column("parentId", "Parent ID", 36),
        ],
    )


# Handlers: internal transfer


TRANSFER_USAGE = f"""{BIN} transfer --from <account-id> --to <account-id> --amount <cents> --idempotency-key <key> [--note <text>] [--dry-run]
{BIN} transfer ... --json"""


def handle_transfer(args: List[str], context: CommandContext) -> None:
    output_format, remaining = parse_output_flag(args)
    options, positionals = parse_flags(
        remaining,
        value_flags=["--from", "--to", "--amount", "--idempotency-key", "--note"],
        bool_flags=["--dry-run"],
    )
    reject_positionals(positionals)
    amount = parse_amount(options.amount)
    require(options, "--from", "--to", "--amount", "--idempotency-key")

    body: Dict[str, Any] = {
        "fromAccountId": getattr(options, "from"),
        "toAccountId": options.to,
        "amount": amount,
        "idempotencyKey": options.idempotency_key,
    }
    if options.note:
        body["note"] = options.note

    if options.dry_run:
        print_dry_run("POST", "/transfer", body)
        return

    transfer = context.client.request("POST", "/transfer", json_body=body)
    if output_format != "table":
        print_data(transfer, output_format)
        return
    print_details(
        "Transfer Initiated",
        [
            ("ID", transfer.get("id")),
            ("From", transfer.get("fromAccountId")),
            ("To", transfer.get("toAccountId")),
            ("Amount", format_currency(transfer.get("amount"))),
            ("Status", transfer.get("status")),
        ],
    )


# Registry and dispatcher


COMMANDS: Tuple[Command, ...] = (
    Command("login", "Authenticate with your Mercury API token.", LOGIN_USAGE, handle_login),
    Command("logout", "Remove stored authentication token.", f"{BIN} logout", handle_logout),
    Command("status", "Show current authentication and configuration status.", f"{BIN} status", handle_status),
    Command("config", "Show or change CLI settings (default account, API base URL).", CONFIG_USAGE, handle_config),
    Command("accounts", "List and view Mercury accounts.", ACCOUNTS_USAGE, handle_accounts, ("account", "acc")),
    Command(
        "transactions", "List, view, and send transactions.", TRANSACTIONS_USAGE, handle_transactions, ("tx", "txn")
    ),
    Command(
        "recipients",
        "List, view, add, and delete payment recipients.",
        RECIPIENTS_USAGE,
        handle_recipients,
        ("recipient", "recip"),
    ),
    Command("cards", "List cards for an account.", CARDS_USAGE, handle_cards, ("card",)),
    Command("statements", "List and view account statements.", STATEMENTS_USAGE, handle_statements, ("statement",)),
    Command("webhooks", "Manage webhook endpoints.", WEBHOOKS_USAGE, handle_webhooks, ("webhook", "wh")),
    Command("events", "List and view API events (audit trail).", EVENTS_USAGE, handle_events, ("event",)),
    Command("users", "List and view organization users.", USERS_USAGE, handle_users, ("user",)),
    Command(
        "organization",
        "Get organization details (EIN, legal name, DBAs).",
        ORGANIZATION_USAGE,
        handle_organization,
        ("org",),
    ),
    Command(
        "categories", "List transaction categories.", CATEGORIES_USAGE, handle_categories, ("category", "cat")
    ),
    Command("transfer", "Transfer money between your Mercury accounts.", TRANSFER_USAGE, handle_transfer),
    Command("version", "Show mercury-cli version.", f"{BIN} version", handle_version, ("v",)),
)


def print_help(registry: Registry) -> None:
    print(f"{BIN} <command> [options]")
    print()
    print("Commands:")
    # dict.fromkeys keeps first-seen order and drops the alias duplicates
    for command in dict.fromkeys(registry.values()):
        alias_text = f" ({', '.join(command.aliases)})" if command.aliases else ""
        print(f"  {command.name:<16}{command.description}{alias_text}")
    print()
    print("Global options:")
    print("  --json          Output as JSON")
    print("  --yaml          Output as YAML")
    print("  -h, --help      Show help")
    print("  -v, --version   Show version")
    print()
    print(f'Run "{BIN} <command> --help" for command-specific help.')


def print_command_help(command: Command) -> None:
    print(command.usage)
    print()
    print(command.description)


def run(
    argv: Sequence[str],
    registry: Registry,
    context_factory: Callable[[], CommandContext] = create_context,
) -> int:
    args = list(argv)
    first = args[0] if args else None

    if first is None or first in HELP_FLAGS:
        print_help(registry)
        return 0

    try:
        if first in VERSION_FLAGS:
            registry["version"].handler([], context_factory())
            return 0

        command = registry.get(first)
        if command is None:
            print(f"Unknown command: {first}", file=sys.stderr)
            print_help(registry)
            return 1

        command_args = args[1:]
        if any(arg in HELP_FLAGS for arg in command_args):
            print_command_help(command)
            return 0

        command.handler(command_args, context_factory())
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    registry = build_registry(COMMANDS)
    sys.exit(run(sys.argv[1:] if argv is None else argv, registry))


if __name__ == "__main__":
    main()
