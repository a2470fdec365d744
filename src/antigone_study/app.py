"""Interactive CLI application."""
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from antigone_study.bookmarks import get_bookmarks, remove_bookmark, toggle_bookmark, is_bookmarked
from antigone_study.config import get_config
from antigone_study.db import init_db
from antigone_study.models import Settings
from antigone_study.notes import create_note, delete_note, get_notes, get_notes_by_section, save_note
from antigone_study.progress import (
    add_time_spent, get_progress, get_progress_summary, get_score_color, mark_section_visited,
)
from antigone_study.quiz import CHOICES, check_answer, finish_quiz, load_questions, pick_questions
from antigone_study.roster import StudentDirectory
from antigone_study.sections import NOTE_SECTIONS, SECTIONS, path_for_section, section_for_path
from antigone_study.session import AuthenticationRequired, SessionContext
from antigone_study.user_settings import get_settings, save_settings

console = Console()
logger = logging.getLogger(__name__)

EXIT_WORDS = {"q", "menu"}


class SessionExitRequested(Exception):
    """The user asked to leave the current activity and go back to the menu."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def session_int_prompt(prompt: str, choices: list[str] | None = None) -> int:
    label = f"{prompt} [{'/'.join(choices)}]" if choices else prompt
    while True:
        answer = session_prompt(label).strip()
        if choices and answer not in choices:
            console.print(f"[red]Please choose one of: {', '.join(choices)}[/red]")
            continue
        try:
            return int(answer)
        except ValueError:
            console.print("[red]Please enter a number.[/red]")


def session_float_prompt(prompt: str) -> float:
    while True:
        answer = session_prompt(prompt).strip()
        try:
            value = float(answer)
        except ValueError:
            console.print("[red]Please enter a number.[/red]")
            continue
        if value < 0:
            console.print("[red]Please enter a positive number.[/red]")
            continue
        return value


def show_welcome(session: SessionContext):
    user = session.require_user()
    console.print(Panel(
        f"[bold]Antigone[/bold] [dim]de Jean Anouilh[/dim]\n"
        f"Bienvenue, [cyan]{user.name_fr}[/cyan] ({user.name})",
        title="Study Guide", border_style="magenta",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("sections", "List sections"),
        ("visit", "Open a section"),
        ("quiz", "Quick quiz"),
        ("notes", "Your notes"),
        ("bookmarks", "Saved pages"),
        ("progress", "Progress + quiz history"),
        ("settings", "Theme, language, notifications"),
        ("logout", "Log out"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def show_login(session: SessionContext) -> bool:
    """Ask for credentials until a login succeeds. Returns False if the user quits."""
    console.print(Panel(
        "[bold]Connexion[/bold]\n[dim]Enter the username and password you were given in class.[/dim]",
        title="Login", border_style="magenta",
    ))
    while True:
        username = Prompt.ask("Username", default="")
        if username.strip().lower() in ("quit", "exit"):
            return False
        password = Prompt.ask("Password", password=True, default="")
        if not username.strip() or not password.strip():
            console.print("[red]Please enter your username and password.[/red]")
            continue
        if session.login(username, password):
            console.print("[green]Logged in.[/green]")
            return True
        console.print("[red]Invalid username or password.[/red]")


def run_quiz_session(db_path: str, questions: list) -> tuple[int, int]:
    if not questions:
        console.print("[yellow]No questions available![/yellow]")
        return 0, 0
    correct = 0
    console.print(f"\n[bold]Quiz[/bold]: {len(questions)} questions\n")
    for i, q in enumerate(questions, 1):
        console.print(f"[bold]Q{i}.[/bold] {q['stem']}\n")
        for choice in CHOICES:
            console.print(f"  [cyan]{choice})[/cyan] {q[f'choice_{choice}']}")
        answer = session_prompt("\nYour answer", choices=list(CHOICES) + sorted(EXIT_WORDS))
        if check_answer(q, answer):
            console.print("[green]Correct![/green]")
            correct += 1
        else:
            console.print(f"[red]Incorrect.[/red] Answer: [green]{q['correct_answer']}[/green]")
        if q.get("explanation"):
            console.print(f"[dim]{q['explanation']}[/dim]")
        console.print()
    result = finish_quiz(db_path, correct, len(questions))
    color = get_score_color(result.percentage)
    console.print(f"[bold]Score: {correct}/{len(questions)} [{color}]({result.percentage:.0f}%)[/{color}][/bold]\n")
    return correct, len(questions)


def cmd_sections(db_path: str):
    progress = get_progress(db_path)
    table = Table(title="Sections")
    table.add_column("Path", style="cyan")
    table.add_column("Section")
    table.add_column("Last visit")
    table.add_column("Minutes", justify="right")
    for path, section in SECTIONS.items():
        table.add_row(
            path,
            section,
            progress.last_visit.get(section, "")[:16].replace("T", " "),
            f"{progress.time_spent[section]:.0f}" if section in progress.time_spent else "",
        )
    console.print(table)


def cmd_visit(db_path: str):
    target = session_prompt("Path or section (e.g. /themes)").strip()
    section = section_for_path(target)
    path = target
    if section is None:
        path = path_for_section(target)
        section = target if path else None
    if section is None:
        console.print(f"[red]Unknown section: {target}[/red]")
        return
    mark_section_visited(db_path, section)
    console.print(Panel(f"[bold]{section}[/bold] [dim]{path}[/dim]", border_style="cyan"))

    for note in get_notes_by_section(db_path, section):
        console.print(f"  [yellow]•[/yellow] {note.content}")

    bookmarked = is_bookmarked(db_path, path)
    question = "Remove bookmark?" if bookmarked else "Bookmark this page?"
    if Confirm.ask(question, default=False):
        state = toggle_bookmark(db_path, section, section.replace("_", " ").title(), path)
        console.print("[green]Bookmarked.[/green]" if state else "[dim]Bookmark removed.[/dim]")

    minutes = session_float_prompt("Minutes spent studying this section")
    if minutes:
        add_time_spent(db_path, section, minutes)


def cmd_quiz(db_path: str, quiz_path, count: int):
    questions = pick_questions(load_questions(quiz_path), count)
    run_quiz_session(db_path, questions)


def _notes_table(notes: list) -> Table:
    table = Table(title="Notes")
    table.add_column("#", justify="right")
    table.add_column("Section", style="cyan")
    table.add_column("Note")
    table.add_column("Updated")
    for i, note in enumerate(notes, 1):
        table.add_row(str(i), note.section, note.content, note.updated_at[:16].replace("T", " "))
    return table


def _pick(items: list, label: str):
    index = session_int_prompt(label, choices=[str(i) for i in range(1, len(items) + 1)])
    return items[index - 1]


def cmd_notes(db_path: str):
    while True:
        notes = get_notes(db_path)
        if notes:
            console.print(_notes_table(notes))
        else:
            console.print("[yellow]No notes yet.[/yellow]")
        action = session_prompt("Action", choices=["add", "edit", "delete", "filter", "done"], default="done")
        if action == "done":
            return
        if action == "add":
            section = session_prompt("Section", choices=NOTE_SECTIONS)
            content = session_prompt("Note").strip()
            if content:
                create_note(db_path, section, content)
        elif not notes:
            continue
        elif action == "edit":
            note = _pick(notes, "Note number")
            content = session_prompt("New text", default=note.content).strip()
            if content:
                note.content = content
                save_note(db_path, note)
        elif action == "delete":
            note = _pick(notes, "Note number")
            if Confirm.ask("Delete this note?", default=False):
                delete_note(db_path, note.id)
        elif action == "filter":
            section = session_prompt("Section", choices=NOTE_SECTIONS)
            console.print(_notes_table(get_notes_by_section(db_path, section)))


def cmd_bookmarks(db_path: str):
    bookmarks = get_bookmarks(db_path)
    if not bookmarks:
        console.print("[yellow]No bookmarks yet. Use 'visit' to bookmark a page.[/yellow]")
        return
    table = Table(title="Bookmarks")
    table.add_column("#", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Path")
    table.add_column("Saved")
    for i, b in enumerate(bookmarks, 1):
        table.add_row(str(i), b.title, b.url, b.created_at[:10])
    console.print(table)
    if Confirm.ask("Remove a bookmark?", default=False):
        bookmark = _pick(bookmarks, "Bookmark number")
        remove_bookmark(db_path, bookmark.id)
        console.print("[dim]Bookmark removed.[/dim]")


def cmd_progress(db_path: str):
    summary = get_progress_summary(db_path)
    console.print(Panel("[bold]Your progress[/bold]", border_style="blue"))
    best = f"{summary['best_score']:.0f}%" if summary["best_score"] > 0 else "-"
    console.print(f"\n  Sections: [bold]{summary['sections_visited']}[/bold]  |  "
                  f"Time: [bold]{summary['total_time_spent']:.0f} min[/bold]  |  "
                  f"Quizzes: [bold]{summary['quizzes_taken']}[/bold]  |  "
                  f"Avg: [bold]{summary['average_score']:.0f}%[/bold]  |  "
                  f"Best: [bold]{best}[/bold]\n")
    if summary["recent_results"]:
        table = Table(title="Recent Results")
        table.add_column("Date")
        table.add_column("Score", justify="right")
        table.add_column("%", justify="right")
        for r in summary["recent_results"]:
            color = get_score_color(r.percentage)
            table.add_row(
                r.date[:16].replace("T", " "),
                f"{r.score}/{r.total_questions}",
                f"[{color}]{r.percentage:.0f}%[/{color}]",
            )
        console.print(table)


def cmd_settings(db_path: str):
    current = get_settings(db_path)
    console.print(f"  Theme: [cyan]{current.theme}[/cyan]  |  Language: [cyan]{current.language}[/cyan]  |  "
                  f"Notifications: [cyan]{'on' if current.notifications else 'off'}[/cyan]")
    if not Confirm.ask("Change settings?", default=False):
        return
    updated = Settings(
        theme=session_prompt("Theme", choices=["dark", "light"], default=current.theme),
        language=session_prompt("Language", choices=["ar", "fr"], default=current.language),
        notifications=Confirm.ask("Notifications", default=current.notifications),
    )
    save_settings(db_path, updated)
    console.print("[green]Settings saved.[/green]")


def _on_session_change(session: SessionContext):
    if not session.authenticated:
        console.print("[dim]You are logged out.[/dim]")


def main():
    config = get_config()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    db_path = config.db_path
    init_db(db_path)
    directory = StudentDirectory(db_path, config.roster_path)
    session = SessionContext(db_path, directory)
    session.initialize()
    session.subscribe(_on_session_change)

    try:
        while True:
            if not session.authenticated or session.user is None:
                if not show_login(session):
                    break
                show_welcome(session)

            show_menu()
            choice = Prompt.ask("\n[bold]>[/bold]", default="progress").strip().lower()
            if choice in ("quit", "exit", "q"):
                console.print("[dim]Bon courage ![/dim]")
                break
            try:
                session.require_user()
                if choice == "sections":
                    cmd_sections(db_path)
                elif choice == "visit":
                    cmd_visit(db_path)
                elif choice == "quiz":
                    cmd_quiz(db_path, config.quiz_path, config.quiz_length)
                elif choice == "notes":
                    cmd_notes(db_path)
                elif choice == "bookmarks":
                    cmd_bookmarks(db_path)
                elif choice == "progress":
                    cmd_progress(db_path)
                elif choice == "settings":
                    cmd_settings(db_path)
                elif choice == "logout":
                    session.logout()
                else:
                    console.print("[red]Unknown command. Try again.[/red]")
            except SessionExitRequested:
                console.print("[dim]Back to menu.[/dim]")
            except AuthenticationRequired:
                console.print("[yellow]Your session has ended. Please log in again.[/yellow]")
            except KeyboardInterrupt:
                console.print("\n[dim]Use 'quit' to exit.[/dim]")
            except Exception as e:
                logger.debug("Command %s failed", choice, exc_info=True)
                console.print(f"[red]Error: {e}[/red]")
    finally:
        session.close()


if __name__ == "__main__":
    main()
