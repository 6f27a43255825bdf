"""Interactive CLI application."""
import logging
import random
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from sentence_tutor.activity import record_activity
from sentence_tutor.audio import AudioResolver
from sentence_tutor.config import Settings
from sentence_tutor.corpus import CorpusFormatError, filter_sentences, find_sentence, load_corpus
from sentence_tutor.dashboard import (
    format_next_review, get_ladder_distribution, get_mastery_color, get_mastery_label,
    get_next_review_time, get_study_stats,
)
from sentence_tutor.db import get_setting, init_db, set_setting
from sentence_tutor.flashcards import get_due_sentences, load_cards, record_review
from sentence_tutor.generator import generate_quiz
from sentence_tutor.ladder import LADDER_HOURS
from sentence_tutor.languages import LANGUAGES, UnknownLanguageError, get_language
from sentence_tutor.models import AudioQuestion, ChoiceQuestion, PuzzleQuestion, QuizQuestion, Sentence
from sentence_tutor.quiz import get_type_quiz_scores, record_quiz_answer
from sentence_tutor.saved import get_recent_ids, get_saved_ids, is_saved, save_sentence, unsave_sentence
from sentence_tutor.session import QuizSession
from sentence_tutor.streaks import DEFAULT_DAILY_GOAL

console = Console()
logger = logging.getLogger(__name__)

EXIT_WORDS = ("q", "menu")


class SessionExitRequested(Exception):
    """Raised when the learner leaves a quiz or review early."""


def session_prompt(prompt: str, choices: list[str] | None = None, **kwargs) -> str:
    if choices is not None:
        kwargs["choices"] = [*choices, "q"]
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


@dataclass
class AppContext:
    settings: Settings
    corpus: list = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random)

    @property
    def db_path(self) -> str:
        return self.settings.db_path

    @property
    def learning(self) -> str:
        return get_setting(self.db_path, "learning_language", self.settings.learning_language)

    @property
    def known(self) -> str:
        return get_setting(self.db_path, "known_language", self.settings.known_language)

    def audio_resolver(self) -> AudioResolver:
        return AudioResolver(self.settings.audio_base_url, self.corpus)


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def show_welcome(ctx: AppContext):
    console.print(Panel(
        "[bold]Sentence Tutor[/bold]\n"
        f"[dim]Learning {get_language(ctx.learning).name} from {get_language(ctx.known).name}[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("quiz", "Practice quiz from saved sentences"),
        ("flashcards", "Review due sentences"),
        ("browse", "Find and save sentences"),
        ("saved", "List saved sentences"),
        ("languages", "Change language pair"),
        ("import", "Load a sentence corpus"),
        ("dashboard", "Progress overview"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")
    console.print("[dim]Type 'q' during a quiz or review to return here.[/dim]")


def parse_piece_order(answer: str, piece_count: int) -> list[int] | None:
    """Turn '3 1 2' into zero-based indexes; None if invalid or repeated."""
    try:
        numbers = [int(tok) for tok in answer.replace(",", " ").split()]
    except ValueError:
        return None
    if not numbers or len(set(numbers)) != len(numbers):
        return None
    if any(n < 1 or n > piece_count for n in numbers):
        return None
    return [n - 1 for n in numbers]


def ask_puzzle(question: PuzzleQuestion) -> list[str]:
    console.print(f"[bold]{question.prompt}[/bold]")
    console.print(Panel(question.source_text, border_style="cyan"))
    for i, piece in enumerate(question.pieces, 1):
        console.print(f"  [cyan]{i:>2})[/cyan] {piece}")
    while True:
        answer = session_prompt("\nPiece numbers in order (e.g. 3 1 2)")
        order = parse_piece_order(answer, len(question.pieces))
        if order is not None:
            return [question.pieces[i] for i in order]
        console.print("[red]Enter distinct piece numbers from the list.[/red]")


def ask_choice(question: ChoiceQuestion) -> int:
    letters = "abcdefgh"[:len(question.choices)]
    if isinstance(question, AudioQuestion):
        console.print(f"[bold]{question.prompt}[/bold]\n[dim]Audio: {question.audio}[/dim]\n")
    else:
        console.print(f"[bold]Fill in the blank:[/bold] {question.prompt}\n")
    for letter, choice in zip(letters, question.choices):
        console.print(f"  [cyan]{letter})[/cyan] {choice}")
    answer = session_prompt("\nYour answer", choices=list(letters))
    return letters.index(answer)


def run_quiz_session(
    db_path: str, questions: list[QuizQuestion], daily_goal: int = DEFAULT_DAILY_GOAL,
) -> tuple[int, int]:
    if not questions:
        console.print("[yellow]Not enough saved sentences for a quiz. Save some in 'browse' first.[/yellow]")
        return 0, 0
    session = QuizSession(questions)
    console.print(f"\n[bold]Quiz[/bold]: {session.total} questions\n")
    while not session.is_complete:
        question = session.current_question
        console.print(f"[bold]Q{session.index + 1}.[/bold] [dim]{question.question_type.display_name}[/dim]")
        if isinstance(question, PuzzleQuestion):
            correct = session.submit_pieces(ask_puzzle(question))
        else:
            correct = session.submit_choice(ask_choice(question))
        record_quiz_answer(db_path, question, correct)
        if correct:
            console.print("[green]Correct![/green]")
        else:
            console.print(f"[red]Not quite.[/red] Answer: [green]{question.correct_answer}[/green]")
        console.print()
        session.advance()
    console.print(
        f"[bold]Score: {session.score}/{session.total} ({session.score / session.total * 100:.0f}%)[/bold]\n"
    )
    record_activity(db_path, "quiz", goal=daily_goal)
    return session.score, session.total


def run_flashcard_session(
    db_path: str, sentences: list[Sentence], learning: str, known: str, daily_goal: int = DEFAULT_DAILY_GOAL,
) -> int:
    if not sentences:
        console.print("[yellow]No flashcards due right now![/yellow]")
        return 0
    console.print(f"\n[bold]Flashcard Review[/bold]: {len(sentences)} cards\n")
    reviewed = 0
    for i, sentence in enumerate(sentences, 1):
        console.print(Panel(sentence.text(learning), title=f"Card {i}/{len(sentences)}", border_style="cyan"))
        session_prompt("[dim]Press Enter to reveal the translation[/dim]", default="", show_default=False)
        console.print(Panel(sentence.text(known) or "[dim]No translation[/dim]", border_style="green"))
        answer = session_prompt("Did you know it?", choices=["y", "n"])
        card = record_review(db_path, sentence.id, known=answer == "y")
        if answer == "y":
            record_activity(db_path, "flashcard", goal=daily_goal)
        console.print(f"[dim]Next review in {LADDER_HOURS[card.interval_rank]}h[/dim]\n")
        reviewed += 1
    return reviewed


def cmd_quiz(ctx: AppContext):
    questions = generate_quiz(
        ctx.corpus,
        get_saved_ids(ctx.db_path, ctx.learning),
        get_recent_ids(ctx.db_path, ctx.learning, ctx.settings.recent_days),
        ctx.learning,
        ctx.known,
        rng=ctx.rng,
        audio_resolver=ctx.audio_resolver(),
        config=ctx.settings.quiz_config(),
    )
    run_quiz_session(ctx.db_path, questions, ctx.settings.daily_goal)


def cmd_flashcards(ctx: AppContext):
    sentences = [
        s for s in get_due_sentences(ctx.db_path, ctx.corpus, ctx.learning)
        if s.text(ctx.known) is not None
    ]
    run_flashcard_session(ctx.db_path, sentences, ctx.learning, ctx.known, ctx.settings.daily_goal)
    if not sentences:
        when = get_next_review_time(ctx.db_path, ctx.learning)
        console.print(f"[dim]Next review: {format_next_review(when)}[/dim]")


def _sentence_table(ctx: AppContext, sentences: list[Sentence], title: str) -> Table:
    cards = load_cards(ctx.db_path)
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column(get_language(ctx.learning).name)
    table.add_column(get_language(ctx.known).name, style="dim")
    table.add_column("Status")
    for s in sentences:
        if is_saved(ctx.db_path, s.id, ctx.learning):
            card = cards.get(s.id)
            rank = card.interval_rank if card else None
            color = get_mastery_color(rank)
            status = f"[{color}]{get_mastery_label(rank)}[/{color}]"
        else:
            status = ""
        table.add_row(str(s.id), s.text(ctx.learning) or "", s.text(ctx.known) or "", status)
    return table


def cmd_browse(ctx: AppContext):
    topic = Prompt.ask("Topic (blank for all)", default="", show_default=False)
    query = Prompt.ask("Search (blank for all)", default="", show_default=False)
    matches = [
        s for s in filter_sentences(ctx.corpus, topic=topic or None, query=query or None)
        if s.text(ctx.learning) is not None
    ]
    if not matches:
        console.print("[yellow]No matching sentences.[/yellow]")
        return
    console.print(_sentence_table(ctx, matches[:30], f"{len(matches)} sentences"))
    raw = Prompt.ask("IDs to save/unsave (blank to skip)", default="", show_default=False)
    for tok in raw.replace(",", " ").split():
        if not tok.isdigit() or find_sentence(matches, int(tok)) is None:
            console.print(f"[red]Not in the list: {tok}[/red]")
            continue
        sentence_id = int(tok)
        if is_saved(ctx.db_path, sentence_id, ctx.learning):
            unsave_sentence(ctx.db_path, sentence_id, ctx.learning)
            console.print(f"[dim]Removed {sentence_id}[/dim]")
        else:
            save_sentence(ctx.db_path, sentence_id, ctx.learning)
            record_activity(ctx.db_path, "save", goal=ctx.settings.daily_goal)
            console.print(f"[green]Saved {sentence_id}[/green]")


def cmd_saved(ctx: AppContext):
    saved = get_saved_ids(ctx.db_path, ctx.learning)
    sentences = [s for s in ctx.corpus if s.id in saved]
    if not sentences:
        console.print("[yellow]Nothing saved yet.[/yellow]")
        return
    console.print(_sentence_table(ctx, sentences, f"Saved ({len(sentences)})"))


def cmd_languages(ctx: AppContext):
    for lang in LANGUAGES.values():
        console.print(f"  [cyan]{lang.code}[/cyan]) {lang.name}")
    codes = list(LANGUAGES)
    learning = Prompt.ask("Learning language", choices=codes, default=ctx.learning)
    known = Prompt.ask("Known language", choices=codes, default=ctx.known)
    if learning == known:
        console.print("[red]Pick two different languages.[/red]")
        return
    set_setting(ctx.db_path, "learning_language", learning)
    set_setting(ctx.db_path, "known_language", known)
    console.print(f"[green]Now learning {get_language(learning).name} from {get_language(known).name}.[/green]")


def cmd_import(ctx: AppContext):
    file_path = Prompt.ask("Corpus file path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    try:
        corpus = load_corpus(file_path)
    except CorpusFormatError as e:
        console.print(f"[red]{e}[/red]")
        return
    ctx.corpus = corpus
    set_setting(ctx.db_path, "corpus_path", str(Path(file_path).resolve()))
    console.print(f"[green]Loaded {len(corpus)} sentences from {Path(file_path).name}[/green]")


def cmd_dashboard(ctx: AppContext):
    stats = get_study_stats(ctx.db_path, ctx.learning, daily_goal=ctx.settings.daily_goal)
    console.print(Panel(
        f"[bold]{get_language(ctx.learning).name}[/bold] from {get_language(ctx.known).name}",
        title="Progress Dashboard", border_style="blue",
    ))
    console.print(f"\n  Saved: [bold]{stats['saved']}[/bold]  |  "
                  f"Due now: [bold]{stats['due_now']}[/bold]  |  "
                  f"Next review: [bold]{format_next_review(get_next_review_time(ctx.db_path, ctx.learning))}[/bold]")
    console.print(f"  Reviews: [bold]{stats['reviews_done']}[/bold] ({stats['review_retention']}% known)  |  "
                  f"Quiz answers: [bold]{stats['answers_given']}[/bold] ({stats['avg_quiz_score']}% correct)\n")

    goal = stats["daily_goal"]
    filled = min(stats["today_progress"], goal) * 20 // max(goal, 1)
    color = "green" if stats["goal_reached_today"] else "yellow"
    bar = f"[{color}]{'█' * filled}{'░' * (20 - filled)}[/{color}]"
    console.print(f"  Today's goal: {bar} {stats['today_progress']}/{goal}  |  "
                  f"Streak: [bold]{stats['current_streak']}[/bold] days "
                  f"(best {stats['longest_streak']})\n")

    table = Table(title="Interval Ladder")
    table.add_column("Rung", justify="right")
    table.add_column("Interval", justify="right")
    table.add_column("Cards", justify="right")
    for rank, count in get_ladder_distribution(ctx.db_path, ctx.learning).items():
        table.add_row(str(rank), f"{LADDER_HOURS[rank]}h", str(count))
    console.print(table)

    scores = get_type_quiz_scores(ctx.db_path)
    if scores:
        weakest = min(scores, key=scores.get)
        console.print(f"\n  [yellow]Weakest question type: {weakest.display_name} ({scores[weakest]}%)[/yellow]")


def load_initial_corpus(ctx: AppContext) -> list[Sentence]:
    path = get_setting(ctx.db_path, "corpus_path", ctx.settings.corpus_path)
    if path and Path(path).exists():
        try:
            return load_corpus(path)
        except CorpusFormatError as e:
            logger.warning("Falling back to the sample corpus: %s", e)
    return load_corpus()


def main():
    settings = Settings()
    configure_logging(settings.log_level)
    try:
        get_language(settings.learning_language)
        get_language(settings.known_language)
    except UnknownLanguageError as e:
        console.print(f"[red]{e}[/red]")
        return
    init_db(settings.db_path)
    ctx = AppContext(settings=settings)
    ctx.corpus = load_initial_corpus(ctx)

    show_welcome(ctx)

    commands = {
        "quiz": cmd_quiz,
        "flashcards": cmd_flashcards,
        "browse": cmd_browse,
        "saved": cmd_saved,
        "languages": cmd_languages,
        "import": cmd_import,
        "dashboard": cmd_dashboard,
    }
    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="quiz").strip().lower()
        if choice in ("quit", "exit", "q"):
            console.print("[dim]Happy studying![/dim]")
            break
        handler = commands.get(choice)
        if handler is None:
            console.print("[red]Unknown command. Try again.[/red]")
            continue
        try:
            handler(ctx)
        except SessionExitRequested:
            console.print("[dim]Back to menu.[/dim]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            logger.exception("Command %s failed", choice)
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
