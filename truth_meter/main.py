"""Interactive console for checking statements."""

import asyncio
import logging

from rich import print

from .config import get_settings
from .infrastructure.dependencies import get_service_container


async def main():
    """Run the truth meter console."""
    logging.basicConfig(
        level=getattr(logging, get_settings().log_level, logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print("[bold]Truth Meter[/bold] - statement verification against reference sources")
    print("-------------------------------------------------------------------")

    container = get_service_container()
    try:
        verifier = await container.get_statement_verifier()
        repository = container.get_statement_repository()

        while True:
            statement = input("\nEnter a statement to verify (or 'quit' to exit): ")
            if statement.lower() in ('quit', 'exit', 'q'):
                break
            if not statement.strip():
                continue

            print("\nVerifying...")
            result = await verifier.verify(statement)
            statement_id = await repository.save_verification(result)

            print(f"\n[bold]#{statement_id}[/bold] {result.statement}")
            print(f"Score: [cyan]{result.truth_score}/10[/cyan] ({result.truth_rating.value})")
            print(f"\nExplanation: {result.explanation}")

            if result.sources:
                print("\nSources:")
                for i, source in enumerate(result.sources, 1):
                    print(f"{i}. {source.name} - {source.url or 'no link'}")
                    print(f"   {source.excerpt}")

            if result.detailed_analysis:
                print(f"\n{result.detailed_analysis}")

    finally:
        await container.shutdown()


def run():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        pass


if __name__ == "__main__":
    run()
