# cli.py - interactive storefront client with autocomplete
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from storefront_sdk.client import StoreClient

console = Console()
c = StoreClient(
    base_url=os.getenv("STOREFRONT_URL", "http://127.0.0.1:3000"),
    admin_key=os.getenv("ADMIN_API_KEY"),
)

product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Description", width=36)
    table.add_column("Images", justify="right", width=8)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            f"${float(p.get('price') or 0):.2f}",
            p.get("description", ""),
            str(len(p.get("images") or []))
        )
    console.print(table)


def show_cart(cart: List[Dict[str, Any]]):
    total = sum(float(it.get("price") or 0) for it in cart)
    title = f"🛒 Shopping Cart - {len(cart)} item(s) - Total: ${total:.2f}"
    if not cart:
        console.print(Panel("Your cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("#", style="dim", width=4)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Price", justify="right", width=12)

    for index, it in enumerate(cart):
        table.add_row(str(index), it.get("name", "Unknown"), f"${float(it.get('price') or 0):.2f}")

    console.print(Panel(table, title=title, border_style="blue"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner and returns its result,
    or None after printing the error.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        console.print(show_status(f"Error: {e}", False))
        return None


def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([str(p.get("id")) for p in product_cache], ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Storefront",
        "[bold blue]Catalog & Cart CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_id() -> Optional[int]:
    raw = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Product IDs are integers.[/red]")
        return None


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global product_cache

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products) or []

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "4", "🛒 View cart"),
            ("2", "ℹ️ Get product by ID", "5", "🛒 Add to cart"),
            ("3", "➕ Create product (admin)", "6", "➖ Remove from cart"),
            ("7", "🗑️ Delete product (admin)", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            pid = ask_product_id()
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
                if resp:
                    show_products([resp])

        elif choice == "3":
            name = prompt_with_autocomplete("Enter product name")
            price = ask_float("💰 Price", default=10.0)
            description = Prompt.ask("📝 Description")
            images = [u.strip() for u in Prompt.ask("🖼️ Image URLs (comma separated)").split(",") if u.strip()]
            resp = try_api(
                c.create_product, name, price, description, images,
                success_msg=f"Product '{name}' created"
            )
            if resp:
                console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
                product_cache = try_api(c.list_products) or []

        elif choice == "4":
            cart = try_api(c.view_cart, success_msg="Cart loaded")
            if cart is not None:
                show_cart(cart)

        elif choice == "5":
            pid = ask_product_id()
            if pid is not None:
                product = try_api(c.get_product, pid)
                if product:
                    cart = try_api(c.add_to_cart, product, success_msg=f"Added product {pid} to cart")
                    if cart is not None:
                        show_cart(cart)

        elif choice == "6":
            # positions shift after each removal, so always show the fresh cart first
            cart = try_api(c.view_cart)
            if cart:
                show_cart(cart)
                index = IntPrompt.ask("Cart position to remove", default=0)
                cart = try_api(c.remove_from_cart, index, success_msg=f"Removed cart item #{index}")
                if cart is not None:
                    show_cart(cart)

        elif choice == "7":
            pid = ask_product_id()
            if pid is not None and Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                deleted = try_api(c.delete_product, pid)
                if deleted is not None:
                    console.print(show_status(f"Product {pid} deleted" if deleted else f"Product {pid} not found", deleted))
                product_cache = try_api(c.list_products) or []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
