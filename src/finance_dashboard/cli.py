import logging
import typer
from datetime import date, datetime
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel

from finance_dashboard.config.settings import DashboardSettings
from finance_dashboard.database.connection import DatabaseConfig, DatabaseManager
from finance_dashboard.domain.categories import get_category_label
from finance_dashboard.domain.enums import TransactionType
from finance_dashboard.domain.models import Transaction
from finance_dashboard.repositories.sqlite_transaction_repository import SQLiteTransactionRepository
from finance_dashboard.services.dashboard_service import DashboardService
from finance_dashboard.services.models import BreakdownEntry, Summary, TrendEntry

app = typer.Typer(
    name="finance-dashboard",
    help="Record income and expenses and see where your money goes",
    add_completion=False,
)

console = Console()

DATE_FORMATS = ["%Y-%m-%d"]


class State:
    verbose: bool = False
    service: Optional[DashboardService] = None


state = State()


def configure_logging(verbose: bool = False) -> None:
    """Route log records through rich; DEBUG when verbose"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value is not None else None


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    if state.verbose:
        console.print_exception()
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    )
):
    """
    Finance Dashboard - Track transactions and analyze your spending.
    """
    configure_logging(verbose)

    if state.service is None:
        settings = DashboardSettings.load()
        db_manager = DatabaseManager(DatabaseConfig(settings.db_path))
        db_manager.initialize()
        repository = SQLiteTransactionRepository(db_manager)
        state.service = DashboardService(repository, settings)

    state.verbose = verbose


@app.command(name="add")
def add_transaction(
    amount: str = typer.Argument(..., help="Positive amount"),
    category: str = typer.Argument(..., help="Category id (e.g. food, salary)"),
    user: int = typer.Option(1, "--user", "-u", help="User id"),
    transaction_type: TransactionType = typer.Option(
        TransactionType.EXPENSE,
        "--type", "-t",
        help="income or expense",
    ),
    on: Optional[datetime] = typer.Option(
        None,
        "--date", "-d",
        formats=DATE_FORMATS,
        help="Transaction date (YYYY-MM-DD), defaults to today",
    ),
    note: Optional[str] = typer.Option(None, "--note", "-n", help="Free text note"),
):
    """
    Record a transaction.

    Examples:
        finance-dashboard add 12.50 food
        finance-dashboard add 3000 salary --type income --date 2024-01-31
    """
    try:
        saved = state.service.add_transaction(
            user_id=user,
            amount=amount,
            transaction_type=transaction_type,
            category=category,
            transaction_date=_as_date(on),
            note=note,
        )
        console.print(f"[bold green]✓ Added transaction {saved.id}[/bold green] {_format_amount(saved)}")

    except Exception as e:
        _fail(e)


@app.command(name="list")
def list_transactions(
    user: int = typer.Option(1, "--user", "-u", help="User id"),
    period: Optional[str] = typer.Option(
        None,
        "--period", "-p",
        help="thisMonth, lastMonth, last3Months, thisYear or custom",
    ),
    start: Optional[datetime] = typer.Option(None, "--start", formats=DATE_FORMATS, help="First day (custom)"),
    end: Optional[datetime] = typer.Option(None, "--end", formats=DATE_FORMATS, help="Last day (custom)"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category id"),
    transaction_type: Optional[TransactionType] = typer.Option(None, "--type", "-t", help="income or expense"),
    as_of: Optional[datetime] = typer.Option(None, "--as-of", formats=DATE_FORMATS, help="Reference date"),
):
    """
    List transactions, most recent first.

    Examples:
        finance-dashboard list
        finance-dashboard list --period lastMonth --type expense
        finance-dashboard list --start 2024-01-01 --end 2024-03-31 --category food
    """
    try:
        transactions = state.service.get_transactions(
            user,
            period=period,
            now=_as_date(as_of),
            start_date=_as_date(start),
            end_date=_as_date(end),
            category=category,
            transaction_type=transaction_type,
        )

        if not transactions:
            console.print(Panel(
                "[yellow]No transactions found[/yellow]",
                title="Empty",
                border_style="yellow"
            ))
            return

        console.print(_transactions_table(transactions, title=f"Transactions ({len(transactions)})"))

    except Exception as e:
        _fail(e)


@app.command(name="update")
def update_transaction(
    transaction_id: int = typer.Argument(..., help="Transaction id"),
    user: int = typer.Option(1, "--user", "-u", help="User id"),
    amount: Optional[str] = typer.Option(None, "--amount", "-a", help="New amount"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="New category id"),
    transaction_type: Optional[TransactionType] = typer.Option(None, "--type", "-t", help="New type"),
    on: Optional[datetime] = typer.Option(None, "--date", "-d", formats=DATE_FORMATS, help="New date"),
    note: Optional[str] = typer.Option(None, "--note", "-n", help="New note"),
):
    """
    Change some fields of a transaction.

    Examples:
        finance-dashboard update 3 --amount 15.75
        finance-dashboard update 3 --category transportation --note "Bus pass"
    """
    changes = {
        "amount": amount,
        "category": category,
        "type": transaction_type,
        "date": _as_date(on),
        "note": note,
    }
    changes = {field: value for field, value in changes.items() if value is not None}

    if not changes:
        console.print("[yellow]Nothing to update[/yellow]")
        return

    try:
        updated = state.service.update_transaction(user, transaction_id, **changes)
        console.print(f"[bold green]✓ Updated transaction {updated.id}[/bold green] {_format_amount(updated)}")

    except Exception as e:
        _fail(e)


@app.command(name="delete")
def delete_transaction(
    transaction_id: int = typer.Argument(..., help="Transaction id"),
    user: int = typer.Option(1, "--user", "-u", help="User id"),
):
    """Delete a transaction."""
    try:
        state.service.delete_transaction(user, transaction_id)
        console.print(f"[bold green]✓ Deleted transaction {transaction_id}[/bold green]")

    except Exception as e:
        _fail(e)


@app.command(name="summary")
def summary(
    user: int = typer.Option(1, "--user", "-u", help="User id"),
    period: Optional[str] = typer.Option(None, "--period", "-p", help="Period token"),
    start: Optional[datetime] = typer.Option(None, "--start", formats=DATE_FORMATS, help="First day (custom)"),
    end: Optional[datetime] = typer.Option(None, "--end", formats=DATE_FORMATS, help="Last day (custom)"),
    as_of: Optional[datetime] = typer.Option(None, "--as-of", formats=DATE_FORMATS, help="Reference date"),
):
    """
    Show income, expenses, savings rate and spending by category.

    Examples:
        finance-dashboard summary
        finance-dashboard summary --period thisYear
    """
    try:
        report = state.service.get_dashboard(
            user,
            period=period,
            now=_as_date(as_of),
            start_date=_as_date(start),
            end_date=_as_date(end),
        )

        console.print(_summary_panel(report.summary, _range_title(report)))

        if report.breakdown:
            console.print(f"\n[bold]Spending by Category[/bold]")
            console.print(_breakdown_table(report.breakdown))

    except Exception as e:
        _fail(e)


@app.command(name="trend")
def trend(
    user: int = typer.Option(1, "--user", "-u", help="User id"),
    months: Optional[int] = typer.Option(None, "--months", "-m", min=1, help="Number of months"),
    as_of: Optional[datetime] = typer.Option(None, "--as-of", formats=DATE_FORMATS, help="Reference date"),
):
    """
    Show monthly income and expenses.

    Examples:
        finance-dashboard trend
        finance-dashboard trend --months 12
    """
    try:
        entries = state.service.get_monthly_trend(user, months=months, now=_as_date(as_of))
        console.print(_trend_table(entries))

    except Exception as e:
        _fail(e)


@app.command(name="dashboard")
def dashboard(
    user: int = typer.Option(1, "--user", "-u", help="User id"),
    period: Optional[str] = typer.Option(None, "--period", "-p", help="Period token"),
    months: Optional[int] = typer.Option(None, "--months", "-m", min=1, help="Trend length"),
    as_of: Optional[datetime] = typer.Option(None, "--as-of", formats=DATE_FORMATS, help="Reference date"),
):
    """
    Everything at once: summary, categories, trend and recent activity.
    """
    try:
        report = state.service.get_dashboard(
            user,
            period=period,
            now=_as_date(as_of),
            months=months,
        )

        console.print(_summary_panel(report.summary, _range_title(report)))

        if report.breakdown:
            console.print(f"\n[bold]Spending by Category[/bold]")
            console.print(_breakdown_table(report.breakdown))

        console.print("")
        console.print(_trend_table(report.trend))

        if report.recent:
            console.print("")
            console.print(_transactions_table(report.recent, title="Recent Transactions"))

        if state.verbose:
            console.print(f"\n[dim]→ Dashboard generated successfully[/dim]")

    except Exception as e:
        _fail(e)


def _range_title(report) -> str:
    start = report.date_range.start_date or "beginning"
    end = report.date_range.end_date or "today"
    return f"{report.period.value}: {start} → {end}"


def _format_amount(txn: Transaction) -> str:
    if txn.type == TransactionType.EXPENSE:
        return f"[red]-${txn.amount:,.2f}[/red]"
    return f"[green]+${txn.amount:,.2f}[/green]"


def _summary_panel(summary: Summary, title: str) -> Panel:
    summary_text = (
        f"[green]💰 Income:[/green]       ${summary.income:>10,.2f}\n"
        f"[red]💸 Expenses:[/red]     ${summary.expenses:>10,.2f}\n"
        f"{'─' * 30}\n"
    )

    # Balance with color based on positive/negative
    if summary.balance >= 0:
        summary_text += f"[bold green]📈 Balance:[/bold green]      ${summary.balance:>10,.2f}\n"
    else:
        summary_text += f"[bold red]📉 Balance:[/bold red]      ${summary.balance:>10,.2f}\n"

    summary_text += f"[bold]Savings rate:[/bold]    {summary.savings_rate:>10.1f}%"

    return Panel(
        summary_text,
        title=f"[bold]{title}[/bold]",
        border_style="cyan",
        padding=(1, 2)
    )


def _breakdown_table(entries: List[BreakdownEntry]) -> Table:
    table = Table(show_header=True, box=None, padding=(0, 2))
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Amount", justify="right", style="red")
    table.add_column("% of Total", justify="right", style="dim")

    for entry in entries:
        table.add_row(
            get_category_label(entry.category),
            f"${entry.amount:,.2f}",
            f"{entry.percentage:.1f}%",
        )
    return table


def _trend_table(entries: List[TrendEntry]) -> Table:
    table = Table(title="Monthly Trend", show_header=True, padding=(0, 1))
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expenses", justify="right", style="red")
    table.add_column("Net", justify="right")

    for entry in entries:
        net_color = "green" if entry.net >= 0 else "red"
        table.add_row(
            entry.month,
            f"${entry.income:,.2f}",
            f"${entry.expenses:,.2f}",
            f"[{net_color}]${entry.net:,.2f}[/{net_color}]",
        )
    return table


def _transactions_table(transactions: List[Transaction], title: str) -> Table:
    table = Table(title=title, show_header=True, padding=(0, 1))
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan", width=12)
    table.add_column("Category", style="magenta")
    table.add_column("Note", style="white", max_width=40)
    table.add_column("Amount", justify="right", width=12)

    for txn in transactions:
        note = txn.note or ""
        # Truncate note if too long
        if len(note) > 40:
            note = note[:37] + "..."
        table.add_row(
            str(txn.id),
            str(txn.date),
            get_category_label(txn.category),
            note,
            _format_amount(txn),
        )
    return table


def cli_main():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    cli_main()
