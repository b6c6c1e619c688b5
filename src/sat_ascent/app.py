"""Interactive CLI application."""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt, Confirm
from rich.table import Table

from sat_ascent.challenge import Challenge, build_challenge
from sat_ascent.config import DEFAULT_DB_PATH, LOG_FILE, OPTION_KEYS, SUBJECTS
from sat_ascent.dashboard import get_accuracy_color, get_dashboard
from sat_ascent.engine import ProgressEngine
from sat_ascent.generator import GenerationError, QuestionGenerator, feedback_or_default
from sat_ascent.models import Question
from sat_ascent.store import SqliteStore

console = Console()
logger = logging.getLogger(__name__)

EXIT_WORDS = ("q", "menu")


class SessionExitRequested(Exception):
    """User asked to leave the current practice or challenge."""


def session_prompt(prompt: str, choices: Optional[list] = None, default: Optional[str] = None) -> str:
    if choices is not None:
        choices = [*choices, *EXIT_WORDS]
        answer = Prompt.ask(prompt, choices=choices, default=default, case_sensitive=False)
    else:
        answer = Prompt.ask(prompt, default=default)
    if (answer or "").strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def configure_logging(log_file: str = LOG_FILE) -> None:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.TimedRotatingFileHandler(
        log_file, when="midnight", backupCount=3, encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    console_handler = logging.StreamHandler()
    # Keep the terminal for the UI; recoverable problems only go to the log file.
    console_handler.setLevel(logging.ERROR)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[console_handler, file_handler],
    )


def show_welcome():
    console.print(Panel(
        "[bold]SAT Ascent[/bold]\n[dim]Adaptive SAT practice with daily goals[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("practice", "Adaptive practice questions"),
        ("challenge", "Timed 5-question challenge"),
        ("dashboard", "Accuracy, goal + streak"),
        ("reset", "Reset today's progress"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def show_question(question: Question, number: Optional[str] = None) -> None:
    title = f"{question.subject} - {question.topic}"
    if number:
        title = f"{number}  {title}"
    console.print(Panel(question.prompt, title=title, subtitle=question.difficulty, border_style="cyan"))
    for key, text in question.options.items():
        console.print(f"  [cyan]{key})[/cyan] {text}")


def run_practice_question(engine: ProgressEngine, generator: QuestionGenerator, subject: str) -> Optional[bool]:
    """Ask one adaptive question. Returns None if it could not be loaded."""
    difficulty = engine.difficulty_for(subject)
    with console.status("Generating your next question..."):
        try:
            question = generator.generate_question(subject, difficulty)
        except GenerationError:
            console.print("[red]Failed to load question, please try again.[/red]")
            return None
    show_question(question)
    answer = session_prompt("\nYour answer", choices=list(OPTION_KEYS)).upper()
    is_correct = answer == question.correct_option_key
    result = engine.record_answer(subject, is_correct)
    if is_correct:
        console.print("[green]Correct![/green]")
    else:
        console.print(f"[red]Incorrect.[/red] Answer: [green]{question.correct_option_key}[/green]")
    console.print(f"[dim]{question.explanation}[/dim]")
    feedback = feedback_or_default(generator, "correct" if is_correct else "incorrect", question)
    console.print(f"[italic]{feedback}[/italic]")
    if result.goal_just_reached:
        console.print(Panel(
            f"Daily goal reached! Streak: [bold]{result.streak}[/bold] day(s)",
            border_style="green",
        ))
    return is_correct


def cmd_practice(engine: ProgressEngine, generator: QuestionGenerator):
    subject = Prompt.ask("Subject", choices=list(SUBJECTS), default="Math")
    console.print("[dim]Type 'q' at any prompt to return to the menu.[/dim]")
    answered = correct = 0
    try:
        while True:
            outcome = run_practice_question(engine, generator, subject)
            if outcome is not None:
                answered += 1
                correct += int(outcome)
            progress = engine.get_daily_progress()
            console.print(f"[dim]Today: {progress.count}/{progress.goal}[/dim]")
            session_prompt("[dim]Press Enter for the next question[/dim]", default="")
    except SessionExitRequested:
        pass
    if answered:
        console.print(f"[bold]Session: {correct}/{answered} correct[/bold]")


def cmd_challenge(engine: ProgressEngine, generator: QuestionGenerator):
    with console.status("Preparing your challenge..."):
        try:
            questions = build_challenge(generator)
        except GenerationError:
            console.print("[red]Failed to load challenge questions, please try again.[/red]")
            return
    challenge = Challenge(questions)
    console.print(f"\n[bold]Challenge[/bold] - {len(questions)} questions, "
                  f"{int(challenge.time_limit) // 60} minutes\n")
    try:
        for i, question in enumerate(questions):
            if challenge.expired():
                break
            remaining = int(challenge.remaining())
            show_question(question, number=f"Q{i + 1} [{remaining // 60}:{remaining % 60:02d}]")
            answer = session_prompt("Your answer (Enter to skip)", choices=[*OPTION_KEYS, ""], default="")
            if answer and not challenge.answer(i, answer):
                console.print("[yellow]Time's up![/yellow]")
                break
    except SessionExitRequested:
        pass
    result = challenge.finish(engine)
    console.print(Panel(
        f"[bold]{result.correct} / {result.total}[/bold] correct"
        + (" [yellow](time ran out)[/yellow]" if result.timed_out else ""),
        title="Challenge Complete", border_style="yellow",
    ))
    for question, answer in zip(questions, result.answers):
        mark = "[green]✔[/green]" if answer == question.correct_option_key else "[red]✘[/red]"
        console.print(f"  {mark} {question.subject}: {answer or '-'} (answer {question.correct_option_key})")


def cmd_dashboard(engine: ProgressEngine):
    data = get_dashboard(engine)
    overall = data["overall"]
    predicted = data["predicted"]
    daily = data["daily"]

    console.print(Panel(
        f"Predicted score: [bold]{predicted['total']}[/bold]  "
        f"(Math {predicted['math']}, Reading & Writing {predicted['reading_writing']})",
        title="SAT Ascent Dashboard", border_style="blue",
    ))

    color = get_accuracy_color(overall["accuracy"])
    console.print(f"\n  Overall Accuracy: [{color}][bold]{overall['accuracy']}%[/bold][/{color}] "
                  f"({overall['correct']} / {overall['total']} correct)")

    bar_filled = int(daily["percent"] / 5)
    bar = f"[blue]{'█' * bar_filled}{'░' * (20 - bar_filled)}[/blue]"
    console.print(f"  Daily Goal: {bar} {daily['count']} / {daily['goal']} questions")
    console.print(f"  Study Streak: [bold]{data['streak']}[/bold] days\n")

    table = Table(title="Performance Breakdown")
    table.add_column("Subject", style="cyan")
    table.add_column("Correct", justify="right")
    table.add_column("Incorrect", justify="right")
    table.add_column("Accuracy", justify="right")
    table.add_column("Status")
    table.add_column("Next Difficulty")
    for row in data["subjects"]:
        sc_color = get_accuracy_color(row["accuracy"])
        table.add_row(
            row["subject"],
            str(row["correct"]),
            str(row["incorrect"]),
            f"{row['accuracy']}%",
            f"[{sc_color}]{row['label']}[/{sc_color}]",
            row["next_difficulty"],
        )
    console.print(table)

    if data["weakest"]:
        console.print(f"\n  [yellow]Recommendation: Focus on {data['weakest']}[/yellow]")


def cmd_reset(engine: ProgressEngine):
    if Confirm.ask("Reset today's question count? Your streak is kept", default=False):
        engine.reset_daily_progress()
        console.print("[green]Daily progress reset.[/green]")


def main():
    configure_logging()
    engine = ProgressEngine(SqliteStore(DEFAULT_DB_PATH))
    try:
        generator = QuestionGenerator()
    except ValueError as e:
        logger.warning("Question generator unavailable: %s", e)
        generator = None

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="practice").strip().lower()
        try:
            if choice in ("practice", "challenge") and generator is None:
                console.print("[red]Set GEMINI_API_KEY to generate questions.[/red]")
            elif choice == "practice":
                cmd_practice(engine, generator)
            elif choice == "challenge":
                cmd_challenge(engine, generator)
            elif choice == "dashboard":
                cmd_dashboard(engine)
            elif choice == "reset":
                cmd_reset(engine)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Good luck on the SAT![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.exception("Command %s failed", choice)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
