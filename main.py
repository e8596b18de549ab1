"""
ConvoStats - Conversation Archive Analysis

CLI entry point for running the analysis pipeline.
"""

import argparse
import logging
import sys

from convostats.orchestrator import AnalysisRunner, PipelineOrchestrator, build_scorer
from convostats.models.status import RunState
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="ConvoStats - word frequencies and sentiment for exported conversations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze an export, reports go to your home directory
  python main.py conversations.json

  # Write reports somewhere else
  python main.py conversations.json --output-dir ./reports

  # Score sentiment with Gemini instead of VADER
  python main.py conversations.json --sentiment-backend gemini

Note: The gemini backend needs the GOOGLE_API_KEY environment variable.
        """
    )

    parser.add_argument(
        "input",
        help="Exported conversations JSON file"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Directory for report files (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--sentiment-backend",
        default=settings.SENTIMENT_BACKEND,
        choices=["vader", "gemini"],
        help=f"Sentiment scorer (default: {settings.SENTIMENT_BACKEND})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    args = parser.parse_args()

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    if args.sentiment_backend == "gemini" and not settings.GOOGLE_API_KEY:
        logger.error(
            "GOOGLE_API_KEY environment variable not set. "
            "Set it or use --sentiment-backend vader."
        )
        sys.exit(1)

    print("=" * 60)
    print("ConvoStats - Conversation Archive Analysis")
    print("=" * 60)
    print(f"Input: {args.input}")
    print(f"Output: {args.output_dir}")
    print(f"Sentiment: {args.sentiment_backend}")
    print("=" * 60)
    print()

    try:
        orchestrator = PipelineOrchestrator(
            output_dir=args.output_dir,
            scorer=build_scorer(args.sentiment_backend)
        )
        runner = AnalysisRunner(orchestrator)

        final_event = None
        for event in runner.start(args.input).events():
            print(event.message)
            final_event = event

        result = runner.wait()

    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    except KeyboardInterrupt:
        logger.warning("Analysis interrupted by user")
        print("\n⚠️  Analysis interrupted")
        sys.exit(1)

    if final_event is None or final_event.state is RunState.FAILED or result is None:
        print("\n❌ Analysis failed")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)

    print()
    print("=" * 60)
    print("✅ Analysis completed successfully!")
    print("=" * 60)
    print(f"Messages: {result.message_count}")
    print(f"Words: {result.raw_table.total} ({result.raw_table.distinct} distinct)")
    print(f"Words without stop words: {result.filtered_table.total}")
    print(f"Report: {result.raw_report_path}")
    print(f"Report (without stop words): {result.filtered_report_path}")
    print("=" * 60)
    sys.exit(0)


if __name__ == "__main__":
    main()
