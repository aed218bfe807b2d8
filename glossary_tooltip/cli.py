#!/usr/bin/env python3
"""
Glossary Tooltip CLI Interface
Command-line interface for annotating text with glossary tooltips
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .core.annotator import TermAnnotator
from .core.config import AnnotatorConfig, GlossaryTooltipConfig
from .core.toggle import TooltipToggle
from .core.vocabulary import Vocabulary, VocabularyError, load_vocabulary, sample_vocabulary

console = Console()

EXPORT_FORMATS = ("json", "yaml", "csv", "html")


class GlossaryTooltipCLI:
    """Command-line interface for the glossary annotator"""

    def __init__(self, config: Optional[GlossaryTooltipConfig] = None):
        self.config = config or GlossaryTooltipConfig()
        self.annotator = TermAnnotator(self.config.annotator)
        self.vocabulary = Vocabulary()

    def load(self, vocabulary_path: Optional[str] = None) -> bool:
        """Load the vocabulary, reporting failures instead of raising"""
        path = vocabulary_path or self.config.vocabulary_path
        if not path:
            console.print("❌ No vocabulary given. Use --vocabulary or GLOSSARY_TOOLTIP_VOCABULARY.",
                          style="red")
            return False

        try:
            self.vocabulary = load_vocabulary(path, self.config.annotator.detail_url_template)
        except VocabularyError as e:
            console.print(f"❌ {str(e)}", style="red")
            return False

        console.print(f"✅ Loaded {len(self.vocabulary)} terms from {path}", style="green")
        return True

    def annotate(self, text: str, output_path: Optional[str] = None,
                 max_description_length: Optional[int] = None) -> str:
        """Annotate text, then print it or write it to a file"""
        result = self.annotator.annotate(self.vocabulary, text, max_description_length)

        found = self.annotator.find_terms(self.vocabulary, text, max_description_length)
        if found:
            summary = ", ".join(f"{term.name} ×{count}" for term, count in found)
            console.print(f"[dim]Annotated: {summary}[/dim]", highlight=False)
        else:
            console.print("[dim]No glossary terms found[/dim]")

        if output_path:
            Path(output_path).write_text(result, encoding='utf-8')
            console.print(f"✅ Wrote annotated text to {output_path}", style="green")
        else:
            console.print(Syntax(result, "html", word_wrap=True))

        return result

    def show_terms(self, query: Optional[str] = None):
        """Print vocabulary terms, optionally filtered by a search query"""
        terms = self.vocabulary.search(query) if query else list(self.vocabulary)
        if not terms:
            console.print("No matching terms.", style="yellow")
            return

        table = Table(title="Glossary Terms", show_header=True)
        table.add_column("Term", style="cyan")
        table.add_column("Description")
        table.add_column("Detail URL", style="dim")

        for term in terms:
            table.add_row(term.name, term.description, term.detail_url or "")

        console.print(table)

    def export(self, output_path: str):
        """Export vocabulary, format chosen from the file extension"""
        suffix = Path(output_path).suffix.lstrip('.').lower()
        format = "yaml" if suffix == "yml" else suffix
        if format not in EXPORT_FORMATS:
            raise ValueError(f"Unknown format: {format}")

        Path(output_path).write_text(self.vocabulary.export(format), encoding='utf-8')
        console.print(f"✅ Exported {len(self.vocabulary)} terms to {output_path}", style="green")

    def selftest(self) -> bool:
        """Annotate sample text with the built-in vocabulary and toggle a tooltip"""
        console.print(Panel("🧪 Running Self-Test", style="bold magenta"))
        self.vocabulary = sample_vocabulary()

        text = "Objects in Orbit follow Orbit's pull. Gravity sets the Escape velocity."
        console.print("\n1️⃣ Annotating sample text...")
        result = self.annotator.annotate(self.vocabulary, text)
        found = self.annotator.find_terms(self.vocabulary, text)
        if sum(count for _, count in found) != 4:
            console.print("❌ Unexpected number of annotated terms", style="red")
            return False

        console.print("\n2️⃣ Toggling a tooltip...")
        toggle = TooltipToggle()
        toggle.attach("selftest", result)
        label = toggle.labels("selftest")[0]
        if toggle.activate(label) is not True or toggle.activate(label) is not False:
            console.print("❌ Toggle did not flip visibility", style="red")
            return False

        console.print("\n✅ Self-test completed successfully!", style="green")
        return True


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="glossary-tooltip",
        description="Glossary Tooltip - annotate glossary terms in text with tooltip markup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Annotate a file
  glossary-tooltip --vocabulary glossary.yaml --input article.html --output annotated.html

  # Annotate inline text with the ordered-replace behaviour
  glossary-tooltip -v glossary.yaml --text "Objects in Orbit" --legacy

  # List or search terms
  glossary-tooltip -v glossary.yaml --list-terms
  glossary-tooltip -v glossary.yaml --search orbit

  # Export vocabulary
  glossary-tooltip -v glossary.yaml --export glossary.csv

  # Self-test
  glossary-tooltip --selftest
        """
    )

    parser.add_argument(
        "--vocabulary", "-v",
        help="Vocabulary file (YAML or JSON)"
    )

    parser.add_argument(
        "--input", "-i",
        help="Text file to annotate ('-' for stdin)"
    )

    parser.add_argument(
        "--text", "-t",
        help="Text to annotate"
    )

    parser.add_argument(
        "--output", "-o",
        help="Write annotated text to this file"
    )

    parser.add_argument(
        "--max-length", "-m",
        type=int,
        help="Maximum description length before truncation"
    )

    parser.add_argument(
        "--legacy",
        action="store_true",
        help="Replace terms one after another in vocabulary order"
    )

    parser.add_argument(
        "--list-terms", "-l",
        action="store_true",
        help="List vocabulary terms"
    )

    parser.add_argument(
        "--search", "-s",
        help="Search vocabulary terms"
    )

    parser.add_argument(
        "--export", "-e",
        help="Export vocabulary to file (.json, .yaml, .csv or .html)"
    )

    parser.add_argument(
        "--config", "-c",
        help="Configuration file (YAML)"
    )

    parser.add_argument(
        "--selftest",
        action="store_true",
        help="Run self-test with sample data"
    )

    args = parser.parse_args(argv)

    try:
        config = GlossaryTooltipConfig.load_from_file(args.config) if args.config \
            else GlossaryTooltipConfig()
        if args.legacy:
            config.annotator.legacy_ordered_replace = True
        if args.max_length is not None:
            config.annotator = AnnotatorConfig(
                max_description_length=args.max_length,
                read_more_label=config.annotator.read_more_label,
                legacy_ordered_replace=config.annotator.legacy_ordered_replace,
                detail_url_template=config.annotator.detail_url_template,
            )
    except ValueError as e:
        console.print(f"❌ {str(e)}", style="red")
        return 2

    logging.basicConfig(level=config.log_level)

    cli = GlossaryTooltipCLI(config)

    # Handle self-test
    if args.selftest:
        return 0 if cli.selftest() else 1

    if not cli.load(args.vocabulary):
        return 1

    if args.list_terms or args.search:
        cli.show_terms(args.search)

    if args.export:
        try:
            cli.export(args.export)
        except ValueError as e:
            console.print(f"❌ Export failed: {str(e)}", style="red")
            return 1

    text = None
    if args.text is not None:
        text = args.text
    elif args.input == "-":
        text = sys.stdin.read()
    elif args.input:
        try:
            text = Path(args.input).read_text(encoding='utf-8')
        except OSError as e:
            console.print(f"❌ Could not read {args.input}: {str(e)}", style="red")
            return 1

    if text is not None:
        cli.annotate(text, args.output)
    elif not any([args.list_terms, args.search, args.export]):
        parser.print_help()

    return 0


if __name__ == "__main__":
    sys.exit(main())
