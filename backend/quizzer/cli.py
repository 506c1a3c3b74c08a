"""Command line entry point.

Usage:
    quizzer extract handout.pdf
    quizzer generate handout.pdf -o quiz.json
    quizzer generate handout.pdf --relay-url https://relay.example/generate-questions
    quizzer take quiz.json
    quizzer serve --port 8000
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Callable

from quizzer.config import get_settings
from quizzer.errors import QuizzerError
from quizzer.models.exam import ExamSession
from quizzer.models.question import Question
from quizzer.services.pdf_text import extract_text
from quizzer.services.pipeline import quiz_from_pdf
from quizzer.services.quiz_generator import QuizGenerator
from quizzer.services.relay_client import RelayClient
from quizzer.services.response_parser import validate_question_set
from quizzer.services.transports import build_transport

logger = logging.getLogger(__name__)


def cmd_extract(args: argparse.Namespace) -> int:
    print(extract_text(Path(args.pdf).read_bytes()))
    return 0


async def _generate(pdf_bytes: bytes, args: argparse.Namespace) -> list[Question]:
    settings = get_settings()
    if args.relay_url:
        relay = RelayClient(args.relay_url, timeout=settings.request_timeout_seconds)
        return await quiz_from_pdf(pdf_bytes, relay, settings)

    generator = QuizGenerator(build_transport(args.api_key, settings), settings)
    try:
        return await quiz_from_pdf(pdf_bytes, generator, settings)
    finally:
        await generator.aclose()


def cmd_generate(args: argparse.Namespace) -> int:
    questions = asyncio.run(_generate(Path(args.pdf).read_bytes(), args))
    payload = json.dumps([q.model_dump() for q in questions], indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        print(f"Wrote {len(questions)} questions to {args.output}")
    else:
        print(payload)
    return 0


def run_exam(
    session: ExamSession,
    read: Callable[[str], str] | None = None,
    write: Callable[[str], None] = print,
) -> int:
    """Ask every question in the terminal, then print the score and corrections."""
    read = read or input
    for i, q in enumerate(session.questions):
        write(f"\nQ{i + 1}. {q.question}")
        for n, opt in enumerate(q.options, 1):
            write(f"  {n}) {opt}")
        while True:
            try:
                choice = read("Your answer (1-4, blank to skip): ").strip()
            except EOFError:
                write("")
                return _report(session, write)
            if not choice:
                break
            if choice.isdigit() and 1 <= int(choice) <= len(q.options):
                session.pick(i, q.options[int(choice) - 1])
                break
            write("Please enter a number from 1 to 4.")

    return _report(session, write)


def _report(session: ExamSession, write: Callable[[str], None]) -> int:
    result = session.results()
    write(f"\nScore: {result.score} / {result.total}")
    if session.unanswered_count:
        write(f"Unanswered: {session.unanswered_count}")
    for r in result.incorrect:
        write(f"\nQ{r.index + 1}. {r.question}")
        write(f"  Your answer: {r.picked if r.picked is not None else 'No selection'}")
        write(f"  Correct answer: {r.answer}")
    return result.score


def cmd_take(args: argparse.Namespace) -> int:
    raw = Path(args.quiz).read_text(encoding="utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        print(f"Invalid quiz file {args.quiz}: {e}", file=sys.stderr)
        return 1

    result = validate_question_set(data)
    if not result.ok:
        print(f"Invalid quiz file {args.quiz}: {result.message}", file=sys.stderr)
        return 1
    run_exam(ExamSession(questions=result.questions))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from quizzer.main import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=args.host or settings.host,
        port=args.port or settings.port,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizzer",
        description="Turn a PDF handout into a 40-question multiple-choice exam",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("extract", help="Print the normalized text of a PDF")
    p.add_argument("pdf", help="Path to the PDF handout")
    p.set_defaults(func=cmd_extract)

    p = sub.add_parser("generate", help="Generate a question set from a PDF")
    p.add_argument("pdf", help="Path to the PDF handout")
    p.add_argument("-o", "--output", help="Write the questions to this JSON file")
    p.add_argument("--relay-url", help="Generate through a relay instead of calling the model")
    p.add_argument("--api-key", help="Model API key (defaults to the configured key)")
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser("take", help="Take a generated exam in the terminal")
    p.add_argument("quiz", help="Question set JSON written by 'generate'")
    p.set_defaults(func=cmd_take)

    p = sub.add_parser("serve", help="Run the question relay")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        return args.func(args)
    except (QuizzerError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
