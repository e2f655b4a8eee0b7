# cli.py
import argparse
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pycatalog import CatalogAPIError, CatalogClient

console = Console()
c = CatalogClient()

# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
selected_category = "all"

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=f"{title} ({len(products)})",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=10)
    table.add_column("Title", style="bold", width=26)
    table.add_column("Category", width=14)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=7)
    table.add_column("Rating", justify="right", width=7)

    for p in products:
        stock = p.get("stock", 0)
        stock_cell = f"[red]{stock}[/red]" if stock == 0 else str(stock)
        table.add_row(
            p.get("id", "N/A"),
            p.get("title", "N/A"),
            p.get("category", "N/A"),
            f"{p.get('price', 0):.2f}",
            stock_cell,
            f"★ {p.get('rating', 0)}"
        )
    console.print(table)


def show_product(p: Dict[str, Any]):
    body = (
        f"[bold]{p.get('title')}[/bold]  [dim]({p.get('id')})[/dim]\n"
        f"Category: {p.get('category')}\n"
        f"Price: [green]{p.get('price', 0):.2f}[/green]   Stock: {p.get('stock')}   Rating: ★ {p.get('rating')}\n"
    )
    if p.get("description"):
        body += f"\n{p['description']}\n"
    if p.get("imageUrl"):
        body += f"\n[dim]{p['imageUrl']}[/dim]"
    console.print(Panel(body, title="ℹ️ Product", border_style="cyan"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def filter_by_category(products: List[Dict[str, Any]], category: str) -> List[Dict[str, Any]]:
    if category == "all":
        return products
    return [p for p in products if p.get("category") == category]


def categories_of(products: List[Dict[str, Any]]) -> List[str]:
    return ["all"] + list(dict.fromkeys(p.get("category", "") for p in products))


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API errors are shown as a status panel and None is returned.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except CatalogAPIError as e:
        status_message = f"Error: {e.describe()}"
    except Exception as e:
        status_message = f"Error: {e}"
    console.print(show_status(status_message, False))
    return None


def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    ids = [p.get("id", "") for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


# ---------------------------
# Form input
# ---------------------------
def ask_product_form(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Prompt for product fields. When editing, defaults come from current and
    only changed fields are returned.
    """
    current = current or {}
    fields = [
        ("title", "Title"),
        ("category", "🏷️ Category"),
        ("price", "💰 Price"),
        ("stock", "📦 Stock"),
        ("rating", "⭐ Rating (0-5)"),
        ("description", "Description"),
        ("imageUrl", "Image URL"),
    ]
    out: Dict[str, Any] = {}
    for key, label in fields:
        default = current.get(key, "")
        raw = Prompt.ask(label, default=str(default) if default != "" else "")
        if current and raw == str(default):
            continue
        if raw == "" and key not in ("title", "category", "price"):
            continue
        out[key] = raw
    return out


def form_is_complete(form: Dict[str, Any]) -> bool:
    return all(str(form.get(k, "")).strip() for k in ("title", "category", "price"))


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ PyCatalog",
        "[bold blue]Product Catalog CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global product_cache, selected_category

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, not status_message.startswith("Error")))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        options = [
            ("1", "📦 List products", "5", "✏️ Edit product"),
            ("2", "🏷️ Filter by category", "6", "🗑️ Delete product"),
            ("3", "🔍 Search by title", "q", "👋 Quit"),
            ("4", "➕ Create product", "", ""),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title=f"📋 Menu  [dim]category: {selected_category}[/dim]", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded")
            if products is not None:
                product_cache = products
                show_products(filter_by_category(products, selected_category))

        elif choice == "2":
            cats = categories_of(product_cache)
            selected_category = prompt_with_autocomplete(
                "Category", completer=WordCompleter(cats, ignore_case=True), default="all"
            ).strip() or "all"
            show_products(filter_by_category(product_cache, selected_category), title=f"🏷️ {selected_category}")

        elif choice == "3":
            term = prompt_with_autocomplete("Enter search term")
            res = try_api(c.list_products, q=term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res, title=f"🔍 '{term}'")

        elif choice == "4":
            form = ask_product_form()
            if not form_is_complete(form):
                console.print(show_status("Title, category and price are required", False))
                continue
            resp = try_api(c.create_product, success_msg="Product created", **form)
            if resp:
                show_product(resp)
                product_cache = try_api(c.list_products) or []

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
            current = try_api(c.get_product, pid)
            if current:
                patch = ask_product_form(current)
                if not patch:
                    console.print("[italic yellow]Nothing changed[/italic yellow]")
                    continue
                resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **patch)
                if resp:
                    show_product(resp)
                    product_cache = try_api(c.list_products) or []

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                product_cache = try_api(c.list_products) or []

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            return

        console.print()
        console.rule(style="dim")


# ---------------------------
# One-shot subcommands
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PyCatalog CLI")
    parser.add_argument("--url", help="Catalog API base URL")
    subparsers = parser.add_subparsers(dest="command")

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Only products in this category")
    lp.add_argument("--q", help="Case-insensitive title search")

    subparsers.add_parser("categories", help="List categories")

    gp = subparsers.add_parser("get", help="Show a product")
    gp.add_argument("product_id")

    cp = subparsers.add_parser("create", help="Create a product")
    cp.add_argument("--title", required=True)
    cp.add_argument("--price", required=True)
    cp.add_argument("--category")
    cp.add_argument("--stock")
    cp.add_argument("--rating")
    cp.add_argument("--description")
    cp.add_argument("--image-url", dest="imageUrl")

    up = subparsers.add_parser("update", help="Update fields of a product")
    up.add_argument("product_id")
    for flag in ("--title", "--price", "--category", "--stock", "--rating", "--description"):
        up.add_argument(flag)
    up.add_argument("--image-url", dest="imageUrl")

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("product_id")
    return parser


def _fields(args, names) -> Dict[str, Any]:
    return {n: getattr(args, n) for n in names if getattr(args, n) is not None}


def run_command(args, client: CatalogClient) -> int:
    try:
        if args.command == "list":
            show_products(client.list_products(category=args.category, q=args.q))
        elif args.command == "categories":
            for cat in client.list_categories():
                console.print(f"• {cat}")
        elif args.command == "get":
            show_product(client.get_product(args.product_id))
        elif args.command == "create":
            fields = _fields(args, ("category", "stock", "rating", "description", "imageUrl"))
            show_product(client.create_product(args.title, args.price, **fields))
        elif args.command == "update":
            fields = _fields(args, ("title", "price", "category", "stock", "rating", "description", "imageUrl"))
            show_product(client.update_product(args.product_id, **fields))
        elif args.command == "delete":
            client.delete_product(args.product_id)
            console.print(show_status(f"Product {args.product_id} deleted"))
    except CatalogAPIError as e:
        console.print(show_status(f"Error: {e.describe()}", False))
        return 1
    return 0


if __name__ == "__main__":
    args = build_parser().parse_args()
    if args.url:
        c = CatalogClient(base_url=args.url)
    if args.command is None:
        try:
            menu()
        except KeyboardInterrupt:
            console.print("\n\n[bold red]Interrupted by user[/bold red]")
            sys.exit(1)
    else:
        sys.exit(run_command(args, c))
