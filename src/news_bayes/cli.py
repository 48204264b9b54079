"""Command-line interface for news-bayes.

Provides ``evaluate`` and ``classify`` commands with rich terminal
output using the ``click`` and ``rich`` libraries. Options can also be
set through ``NEWS_BAYES_*`` environment variables or a ``.env`` file.

Usage::

    news-bayes evaluate ag-news/train.csv ag-news/test.csv ag-news/classes.txt
    news-bayes evaluate --alpha 1 --output json train.csv test.csv classes.txt
    news-bayes classify train.csv classes.txt "Stocks rally as oil slips"
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .classifier import NaiveBayesClassifier
from .config import ENV_PREFIX, ClassifierConfig
from .evaluation import EvaluationReport, evaluate
from .exceptions import NewsBayesError
from .models import Document
from .parsers import read_class_names, read_documents

console = Console()

logger = logging.getLogger(__name__)

_alpha_option = click.option(
    "--alpha", "-a", type=click.FloatRange(min=0.0), default=0.0,
    envvar=f"{ENV_PREFIX}_ALPHA", show_envvar=True, show_default=True,
    help="Additive smoothing for word probabilities (0 disables smoothing).",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _train(train_file: Path, classes_file: Path, config: ClassifierConfig) -> NaiveBayesClassifier:
    class_names = read_class_names(classes_file)
    model = NaiveBayesClassifier(class_names, config=config)
    model.train(read_documents(train_file))
    return model


def _fmt(value: float | None) -> str:
    return f"{value:.2%}" if value is not None else "n/a"


@click.group()
@click.version_option(package_name="news-bayes")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """📰 news-bayes: Naive Bayes news topic classifier.

    Train on a labeled news table, classify held-out items, and report
    per-class precision with a confusion matrix.
    """
    load_dotenv(find_dotenv(usecwd=True))
    _configure_logging(verbose)


@main.command("evaluate")
@click.argument("train_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("test_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("classes_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_alpha_option
@click.option("--top-words", "-n", type=click.IntRange(min=0), default=10,
              envvar=f"{ENV_PREFIX}_TOP_WORDS", show_envvar=True, show_default=True,
              help="Most frequent words to show per class (0 hides them).")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
@click.option("--save", "-s", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Save the report to a JSON file.")
def evaluate_command(
    train_file: Path,
    test_file: Path,
    classes_file: Path,
    alpha: float,
    top_words: int,
    output: str,
    save: Path | None,
) -> None:
    """Train on TRAIN_FILE and report precision on TEST_FILE.

    CLASSES_FILE lists one class name per line, in label order.

    Example: news-bayes evaluate train.csv test.csv classes.txt
    """
    config = ClassifierConfig(alpha=alpha, top_words=top_words)
    logger.debug("Configuration: %s", config)

    with console.status("[bold blue]Training and evaluating...", spinner="dots"):
        try:
            model = _train(train_file, classes_file, config)
            report = evaluate(model, read_documents(test_file))
        except (NewsBayesError, FileNotFoundError) as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    data = report.to_dict()
    data["config"] = config.to_dict()

    if output == "json":
        click.echo(json.dumps(data, indent=2))
    else:
        _render_report(report, model, config)

    if save:
        save.write_text(json.dumps(data, indent=2), encoding="utf-8")
        console.print(f"\n[dim]Report saved to {save}[/]")


@main.command("classify")
@click.argument("train_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("classes_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("text")
@_alpha_option
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich",
              help="Output format.")
def classify_command(
    train_file: Path,
    classes_file: Path,
    text: str,
    alpha: float,
    output: str,
) -> None:
    """Train on TRAIN_FILE and classify a single TEXT.

    Example: news-bayes classify train.csv classes.txt "Oil prices climb"
    """
    config = ClassifierConfig(alpha=alpha)

    with console.status("[bold blue]Training...", spinner="dots"):
        try:
            model = _train(train_file, classes_file, config)
        except (NewsBayesError, FileNotFoundError) as e:
            console.print(f"[bold red]Error:[/] {e}")
            sys.exit(1)

    result = model.classify(Document(label=0, title=text, description=""))
    predicted_name = model.class_names[result.predicted_class]

    if output == "json":
        data = result.to_dict()
        data["predicted_name"] = predicted_name
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title="Class scores")
    table.add_column("Class", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("log2", justify="right", style="dim")
    for class_id, name in enumerate(model.class_names):
        style = "bold green" if class_id == result.predicted_class else ""
        table.add_row(
            name,
            f"{result.scores[class_id]:.3e}",
            f"{result.log_scores[class_id]:.2f}",
            style=style,
        )

    console.print()
    console.print(f"Predicted class: [bold green]{predicted_name}[/]")
    console.print(table)
    if result.score == 0.0:
        console.print(
            "[yellow]Every class scored zero; the text contains words unseen in "
            "training. Try --alpha 1.[/]"
        )
    console.print()


# ------------------------------------------------------------------
# Rich rendering helpers
# ------------------------------------------------------------------

def _render_report(
    report: EvaluationReport,
    model: NaiveBayesClassifier,
    config: ClassifierConfig,
) -> None:
    """Render an EvaluationReport with rich formatting."""
    console.print()

    console.print(Panel(
        f"Training documents: {model.total_documents} | "
        f"Vocabulary: {len(model.vocabulary)} | "
        f"Evaluated: {report.total} | "
        f"Alpha: {config.alpha}",
        title="📰 Naive Bayes Evaluation",
        border_style="blue",
    ))

    # Per-class metrics
    table = Table(title="Per-class results")
    table.add_column("Class", style="cyan")
    table.add_column("Trained", justify="right")
    table.add_column("Support", justify="right")
    table.add_column("Precision", justify="right")
    table.add_column("Recall", justify="right")
    for class_id, name in enumerate(report.class_names):
        table.add_row(
            name,
            str(report.training_documents[class_id]),
            str(report.support[class_id]),
            _fmt(report.precision[class_id]),
            _fmt(report.recall[class_id]),
        )
    console.print(table)
    console.print()

    _render_confusion_matrix(report)

    if config.top_words:
        words = Table(title=f"Top {config.top_words} words per class", show_lines=True)
        words.add_column("Class", style="cyan", width=15)
        words.add_column("Words", style="white")
        for name, stats in zip(model.class_names, model.classes):
            words.add_row(
                name,
                ", ".join(f"{w} ({c})" for w, c in stats.most_common(config.top_words)),
            )
        console.print(words)
        console.print()

    overall = report.overall_precision
    if overall is None:
        style = "dim"
    elif overall > 0.8:
        style = "bold green"
    elif overall > 0.5:
        style = "bold yellow"
    else:
        style = "bold red"
    console.print(f"Overall precision: [{style}]{_fmt(overall)}[/]")
    console.print()


def _render_confusion_matrix(report: EvaluationReport) -> None:
    """Render the confusion matrix, predicted classes as rows."""
    matrix = report.confusion_matrix
    table = Table(title="Confusion matrix (rows: predicted, columns: actual)")
    table.add_column("", style="cyan")
    for name in report.class_names:
        table.add_column(name, justify="right")

    for predicted, name in enumerate(report.class_names):
        table.add_row(name, *(
            f"[bold]{count}[/]" if predicted == actual else str(count)
            for actual, count in enumerate(matrix[predicted])
        ))

    console.print(table)
    console.print()


if __name__ == "__main__":
    main()
