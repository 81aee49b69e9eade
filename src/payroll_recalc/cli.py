"""Payroll recalculation command line interface.

Usage:
    payroll-recalc recalculate --payroll-id X --company-id Y [--line-id Z ...]
    payroll-recalc recalculate --payroll-id X --cross-company
    payroll-recalc init-db
    payroll-recalc serve [--host H] [--port P]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Callable
from uuid import UUID

from payroll_recalc.config import get_settings
from payroll_recalc.database import dispose_db, get_session, init_db
from payroll_recalc.logging_config import configure_logging
from payroll_recalc.models import Base
from payroll_recalc.services.errors import RecalculationError
from payroll_recalc.services.recalculation_service import (
    RecalculationResult,
    RecalculationService,
    RequestingUser,
)


def parse_uuid(s: str) -> UUID:
    """Parse UUID string."""
    return UUID(s)


class RecalcCli:
    """Payroll recalculation command line interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="payroll-recalc",
            description="Payroll recalculation tools",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # recalculate command
        recalc = subparsers.add_parser(
            "recalculate",
            help="Recalculate payroll lines and print the result as JSON",
        )
        recalc.add_argument(
            "--payroll-id",
            type=parse_uuid,
            required=True,
            help="Payroll period to recalculate",
        )
        recalc.add_argument(
            "--company-id",
            type=parse_uuid,
            help="Company the operator acts for",
        )
        recalc.add_argument(
            "--cross-company",
            action="store_true",
            help="Act across companies (administrative override)",
        )
        recalc.add_argument(
            "--line-id",
            type=parse_uuid,
            action="append",
            dest="line_ids",
            help="Payroll line to recalculate (repeatable, default: all lines)",
        )

        # init-db command
        subparsers.add_parser(
            "init-db",
            help="Create the database tables",
        )

        # serve command
        serve = subparsers.add_parser(
            "serve",
            help="Run the HTTP API",
        )
        serve.add_argument("--host", type=str, help="Bind host (default: $HOST)")
        serve.add_argument("--port", type=int, help="Bind port (default: $PORT)")

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        configure_logging(get_settings().log_level)

        # Dispatch to command handler
        handlers: dict[str, Callable[..., int]] = {
            "recalculate": self._cmd_recalculate,
            "init-db": self._cmd_init_db,
            "serve": self._cmd_serve,
        }

        handler = handlers.get(parsed.command)
        if handler:
            return handler(parsed)

        print(f"Unknown command: {parsed.command}", file=sys.stderr)
        return 1

    def _cmd_recalculate(self, args: argparse.Namespace) -> int:
        """Recalculate payroll lines."""
        if args.company_id is None and not args.cross_company:
            print("Either --company-id or --cross-company is required", file=sys.stderr)
            return 2

        user = RequestingUser(
            user_id=None,
            company_id=args.company_id,
            cross_company=args.cross_company,
        )
        try:
            result = asyncio.run(self._recalculate(args.payroll_id, user, args.line_ids))
        except RecalculationError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(json.dumps(result.to_dict(), indent=2))
        return 0 if not result.failed else 3

    async def _recalculate(
        self,
        payroll_id: UUID,
        user: RequestingUser,
        line_ids: list[UUID] | None,
    ) -> RecalculationResult:
        try:
            async with get_session() as session:
                service = RecalculationService(session)
                return await service.recalculate(payroll_id, user, target_ids=line_ids)
        finally:
            await dispose_db()

    def _cmd_init_db(self, args: argparse.Namespace) -> int:
        """Create all tables that do not exist yet."""
        asyncio.run(self._create_tables())
        print("Tables created")
        return 0

    async def _create_tables(self) -> None:
        engine, _ = init_db()
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        finally:
            await dispose_db()

    def _cmd_serve(self, args: argparse.Namespace) -> int:
        """Run the API with uvicorn."""
        import uvicorn

        settings = get_settings()
        uvicorn.run(
            "payroll_recalc.api.app:app",
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=settings.debug,
        )
        return 0


def main() -> int:
    """CLI entry point."""
    cli = RecalcCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
