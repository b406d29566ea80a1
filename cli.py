# cli.py - interactive storefront client
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

import requests
from sdk.pystore import StoreClient

console = Console()
c = StoreClient(base_url=os.environ.get("STOREFRONT_URL", "http://127.0.0.1:3000"))

status_message = "Ready"
item_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_items(items: List[Dict[str, Any]]):
    if not items:
        console.print("[italic yellow]No items found[/italic yellow]")
        return

    table = Table(
        title="📦 Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)

    for it in items:
        price = it.get("price")
        price_str = f"${price:.2f}" if isinstance(price, (int, float)) else str(price)
        table.add_row(str(it.get("id", "N/A")), str(it.get("name", "N/A")), price_str, str(it.get("category", "N/A")))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def _error_text(e: Exception) -> str:
    # the service answers errors with a plain-text body (empty for 401/403)
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        body = e.response.text.strip()
        return f"HTTP {e.response.status_code}" + (f": {body}" if body else "")
    return str(e)


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the result, or None after printing the error.
    """
    global status_message
    try:
        with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), transient=True) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except requests.exceptions.RequestException as e:
        status_message = f"Error: {_error_text(e)}"
        console.print(show_status(status_message, False))
        return None


def get_item_completer():
    global item_cache
    if not item_cache:
        item_cache = try_api(c.list_items) or []
    return WordCompleter([str(i.get("id")) for i in item_cache], ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    who = c.username or "not logged in"
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row("🛍️ storefront", f"[bold blue]{who}[/bold blue]", f"[dim]{now}[/dim]")
    return Panel(header, style="bold blue")


def ask(message: str, completer=None, default: str = "") -> str:
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_price(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global item_cache

    console.clear()
    console.print(create_header())

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in [
            ("1", "👤 Sign up", "5", "✏️ Update item"),
            ("2", "🔑 Log in", "6", "🗑️ Delete item"),
            ("3", "📦 List items", "7", "🛒 Add to cart"),
            ("4", "➕ Create item", "q", "👋 Quit"),
        ]:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = ask("\nChoose an option", completer=WordCompleter([str(i) for i in range(1, 8)] + ["q"])).strip()

        if choice == "1":
            username = ask("Username")
            password = Prompt.ask("Password", password=True)
            try_api(c.signup, username, password, success_msg=f"User '{username}' created")

        elif choice == "2":
            username = ask("Username")
            password = Prompt.ask("Password", password=True)
            if try_api(c.login, username, password, success_msg=f"Logged in as {username}"):
                console.print(create_header())

        elif choice == "3":
            category = ask("Category (blank for any)").strip() or None
            lo = ask("Min price (blank for none)").strip()
            hi = ask("Max price (blank for none)").strip()
            items = try_api(c.list_items, category, lo or None, hi or None, success_msg="Items loaded")
            if items is not None:
                item_cache = items
                show_items(items)

        elif choice == "4":
            name = ask("Item name")
            price = ask_price("💰 Price")
            category = ask("🏷️ Category")
            item = try_api(c.create_item, name, price, category, success_msg=f"Item '{name}' created")
            if item:
                item_cache = []
                show_items([item])

        elif choice == "5":
            raw_id = ask("Item id", completer=get_item_completer()).strip()
            if not raw_id.isdigit():
                console.print(show_status("Item id must be a number", False))
                continue
            item_id = int(raw_id)
            fields = {}
            name = ask("New name (blank to keep)").strip()
            if name:
                fields["name"] = name
            if Confirm.ask("Change price?", default=False):
                fields["price"] = ask_price("💰 New price")
            category = ask("New category (blank to keep)").strip()
            if category:
                fields["category"] = category
            item = try_api(c.update_item, item_id, success_msg=f"Item {item_id} updated", **fields)
            if item:
                item_cache = []
                show_items([item])

        elif choice == "6":
            item_id = IntPrompt.ask("Item id")
            if Confirm.ask(f"[red]Delete item {item_id}?[/red]"):
                if try_api(c.delete_item, item_id, success_msg=f"Item {item_id} deleted"):
                    item_cache = []

        elif choice == "7":
            item_id = IntPrompt.ask("Item id")
            qty = IntPrompt.ask("Quantity", default=1)
            msg = try_api(c.add_to_cart, item_id, qty)
            if msg:
                console.print(show_status(msg, True))

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
