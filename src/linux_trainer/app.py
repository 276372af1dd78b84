"""Interactive CLI application."""
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from linux_trainer.bank import DEFAULT_BANK_PATH, EmptyBank, load_bank
from linux_trainer.db import DEFAULT_DB_PATH, DEFAULT_LOG_PATH
from linux_trainer.session import PRESENTED, SessionController
from linux_trainer.store import StateStore

console = Console()


def configure_logging(log_path: str = DEFAULT_LOG_PATH) -> None:
    """Send log output to a file so it never interleaves with the UI."""
    logger.remove()
    logger.add(log_path, level="DEBUG", rotation="1 MB",
               format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name} | {message}")


def show_welcome():
    console.print(Panel(
        "[bold]Linux Trainer[/bold]\n[dim]Adaptive command-line quiz[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("next", "Start/next question"),
        ("scores", "Scores per section"),
        ("study", "Sections to study"),
        ("reset", "Forget all progress"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def show_progress(controller: SessionController) -> None:
    progress = controller.overall_progress()
    console.print(f"Overall Progress: [bold]{progress:.1f}%[/bold]")


def show_explanation(controller: SessionController) -> None:
    controller.show_explanation()
    q = controller.current_question()
    console.print(f"[bold]Explanation:[/bold] {q.explanation}")
    if q.example:
        console.print(Panel(q.example, title="Example", border_style="dim"))
    if q.link:
        console.print(f"[bold]More Info:[/bold] [link={q.link}]{q.link}[/link]")


def run_question(controller: SessionController) -> bool:
    """Present one question through its whole lifecycle. Returns correctness."""
    if controller.phase != PRESENTED:
        controller.next()
    q = controller.current_question()
    console.print(Panel(
        f"[bold]Question:[/bold] {q.question}",
        title=f"Section: {controller.current_section()} | Level: {controller.current_level()}",
        border_style="cyan",
    ))
    for i, option in enumerate(q.options, 1):
        console.print(f"  [cyan]{i})[/cyan] {option}")
    if controller.session.hint_revealed:
        console.print(f"[bold]Hint:[/bold] [yellow]{q.hint}[/yellow]")

    choices = [str(i) for i in range(1, len(q.options) + 1)]
    while True:
        prompt_choices = choices if controller.session.hint_revealed else choices + ["h"]
        answer = Prompt.ask("\nYour answer (h for hint)", choices=prompt_choices)
        if answer == "h":
            controller.request_hint()
            console.print(f"[bold]Hint:[/bold] [yellow]{q.hint}[/yellow]")
            continue
        break

    selected = int(answer) - 1
    is_correct = controller.select_option(selected)
    console.print(f"[bold]Answer:[/bold] {q.answer}")
    console.print(f"You selected: {q.options[selected]}")
    if is_correct:
        console.print("[green]Correct![/green]")
    else:
        console.print(f"[red]Incorrect.[/red] Answer: [green]{q.options[q.correct_index]}[/green]")

    if Prompt.ask("Show explanation?", choices=["y", "n"], default="n") == "y":
        show_explanation(controller)
    show_progress(controller)
    return is_correct


def cmd_scores(controller: SessionController):
    rows = controller.scoreboard()
    show_progress(controller)
    if not rows:
        console.print("[dim]No questions answered yet.[/dim]")
        return
    table = Table(title="Your Scores")
    table.add_column("Section", style="cyan")
    table.add_column("Correct", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Status")
    for row in rows:
        color = row["color"]
        rate = f"{row['rate']}%" if row["rate"] is not None else "N/A"
        table.add_row(
            row["section"],
            f"{row['correct']}/{row['total']}",
            rate,
            f"[{color}]{row['label']}[/{color}]",
        )
    console.print(table)


def cmd_study(controller: SessionController):
    sections = controller.sections_needing_study()
    console.print("\n[bold]Sections to Study[/bold]")
    if not sections:
        console.print("[green]No sections need extra study at this time.[/green]")
        return
    for section in sections:
        console.print(f"  [yellow]•[/yellow] {section}")


def cmd_reset(controller: SessionController):
    if Prompt.ask("Really forget all progress?", choices=["y", "n"], default="n") != "y":
        return
    if controller.store is not None:
        controller.store.reset()
    controller.state.scores.clear()
    controller.state.weak.clear()
    controller.state.answered.clear()
    controller.session = None
    console.print("[green]Progress reset.[/green]")


def main():
    store = StateStore(DEFAULT_DB_PATH)
    configure_logging()
    bank = load_bank(DEFAULT_BANK_PATH)
    controller = SessionController(bank, store.load(), store=store)

    show_welcome()
    show_progress(controller)

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="next").strip().lower()
        try:
            if choice in ("next", "start", "n"):
                run_question(controller)
            elif choice == "scores":
                cmd_scores(controller)
            elif choice == "study":
                cmd_study(controller)
            elif choice == "reset":
                cmd_reset(controller)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Keep practicing![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except EmptyBank as e:
            console.print(f"[red]Question bank problem: {e}[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.exception("Command {} failed", choice)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
