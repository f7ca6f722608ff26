# cli.py
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from fullstock.pricing import format_price as money
from sdk.pystore import StoreClient

console = Console()
c = StoreClient(base_url=os.getenv("FULLSTOCK_URL", "http://127.0.0.1:3000"))

status_message = "Ready"
category_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_categories(categories: List[Dict[str, Any]]):
    if not categories:
        console.print("[italic yellow]No categories found[/italic yellow]")
        return

    table = Table(title="🏷️ Categories", box=box.ROUNDED, header_style="bold cyan", title_style="bold magenta")
    table.add_column("ID", style="dim", width=6)
    table.add_column("Slug", width=16)
    table.add_column("Name", style="bold", width=24)
    for cat in categories:
        table.add_row(str(cat.get("id")), cat.get("slug", ""), cat.get("name", ""))
    console.print(table)


def show_products(products: List[Dict[str, Any]], title: str = "📦 Products"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Image", width=34)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            money(p.get("price", 0)),
            p.get("img_src") or "-",
        )
    console.print(table)


def show_category(view: Dict[str, Any]):
    error = view.get("error")
    if error:
        console.print(Panel.fit(f"[yellow]{error['message']}[/yellow]", title=f"⚠️ {error['title']}"))
    name = view.get("category", {}).get("name", "Category")
    show_products(view.get("products", []), title=f"📦 {name}")


def show_cart(view: Dict[str, Any]):
    title = Text()
    title.append("🛒 Shopping Cart", style="bold")
    title.append(f" - Total: {money(view.get('total_cents', 0))}", style="bold green")

    items = view.get("cart_items", [])
    if not items:
        console.print(Panel("Your cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("ID", style="dim", width=6)
    table.add_column("Product", style="bold", width=28)
    table.add_column("Qty", justify="right", width=6)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Subtotal", justify="right", width=12)

    for it in items:
        product = it.get("product", {})
        table.add_row(
            str(it.get("product_id")),
            product.get("name", "Unknown"),
            str(it.get("quantity", 0)),
            money(product.get("price", 0)),
            money(it.get("subtotal_cents", 0)),
        )
    console.print(Panel(table, title=title, border_style="blue"))


def show_order(view: Dict[str, Any]):
    order = view.get("order", {})
    customer = order.get("customer", {})
    table = Table(box=box.ROUNDED, header_style="bold yellow", show_lines=True)
    table.add_column("Product", style="bold", width=28)
    table.add_column("Qty", justify="right", width=6)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Subtotal", justify="right", width=12)
    for line in order.get("items", []):
        table.add_row(line["name"], str(line["quantity"]), money(line["price"]), money(line["subtotal_cents"]))

    console.print(Panel(
        table,
        title=f"✅ Order #{order.get('id')} - {customer.get('first_name', '')} {customer.get('last_name', '')}",
        subtitle=f"Total: {money(order.get('total_cents', 0))}",
        border_style="green",
    ))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Errors are printed and recorded in status_message; None is returned.
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
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


def get_category_completer():
    global category_cache
    if not category_cache:
        category_cache = try_api(c.list_categories) or []
    return WordCompleter([cat.get("slug", "") for cat in category_cache], ignore_case=True)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Full Stock",
        "[bold blue]Storefront shell[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_customer() -> Dict[str, str]:
    return {
        "email": Prompt.ask("📧 Email"),
        "firstName": Prompt.ask("First name"),
        "lastName": Prompt.ask("Last name"),
        "address": Prompt.ask("Address"),
        "city": Prompt.ask("City"),
        "country": Prompt.ask("Country"),
        "region": Prompt.ask("Region"),
        "zipCode": Prompt.ask("Zip code"),
        "phone": Prompt.ask("📞 Phone"),
    }


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, category_cache

    console.clear()
    console.print(create_header())
    category_cache = try_api(c.list_categories) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "🏷️ List categories", "5", "🛒 View cart"),
            ("2", "📦 Browse category", "6", "✏️ Update quantity"),
            ("3", "ℹ️ Product detail", "7", "➖ Remove from cart"),
            ("4", "➕ Add to cart", "8", "✅ Checkout"),
            ("", "", "9", "📋 Show order"),
            ("", "", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 10)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            categories = try_api(c.list_categories, success_msg="Categories loaded")
            if categories is not None:
                category_cache = categories
                show_categories(categories)

        elif choice == "2":
            slug = prompt_with_autocomplete("Category slug", completer=get_category_completer())
            min_price = Prompt.ask("Minimum price (blank for none)", default="")
            max_price = Prompt.ask("Maximum price (blank for none)", default="")
            view = try_api(c.list_category, slug, min_price, max_price, success_msg=f"Category '{slug}' loaded")
            if view:
                show_category(view)

        elif choice == "3":
            pid = IntPrompt.ask("Product ID")
            view = try_api(c.get_product, pid)
            if view:
                show_products([view["product"]], title="ℹ️ Product")

        elif choice == "4":
            pid = IntPrompt.ask("Product ID")
            view = try_api(c.add_to_cart, pid, success_msg=f"Added product {pid} to cart")
            if view:
                console.print(f"[dim]Items in cart: {view.get('cart_count', 0)}[/dim]")

        elif choice == "5":
            view = try_api(c.view_cart, success_msg="Cart loaded")
            if view:
                show_cart(view)

        elif choice == "6":
            pid = IntPrompt.ask("Product ID")
            qty = IntPrompt.ask("New quantity (0 removes the line)", default=1)
            view = try_api(c.update_item, pid, qty, success_msg=f"Quantity of product {pid} set to {qty}")
            if view:
                show_cart(view)

        elif choice == "7":
            pid = IntPrompt.ask("Product ID")
            view = try_api(c.remove_item, pid, success_msg=f"Product {pid} removed from cart")
            if view:
                show_cart(view)

        elif choice == "8":
            summary = try_api(c.checkout_view)
            if summary is None:
                continue
            if summary.get("page") != "checkout":
                console.print("[italic yellow]Your cart is empty, nothing to check out[/italic yellow]")
                continue
            show_cart(summary)
            if not Confirm.ask("Place this order?"):
                continue
            view = try_api(c.place_order, ask_customer(), success_msg="Order placed")
            if view and view.get("page") == "order-confirmation":
                show_order(view)

        elif choice == "9":
            order_id = IntPrompt.ask("Order ID")
            view = try_api(c.get_order, order_id)
            if view:
                show_order(view)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thanks for shopping at Full Stock! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def main():
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
