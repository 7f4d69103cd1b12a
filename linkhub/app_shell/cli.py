import argparse
import getpass
import logging
import sys

from linkhub.components.session import SignInInput
from linkhub.settings.loader import settings_from_env
from linkhub.ui.context import ServiceContext

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("cli")


def get_context() -> ServiceContext:
    try:
        settings = settings_from_env()
    except (FileNotFoundError, ValueError) as err:
        logger.error(f"Invalid settings: {err}")
        sys.exit(1)
    return ServiceContext.create(settings)


def handle_public(ctx: ServiceContext, args: argparse.Namespace) -> int:
    result = ctx.public_reader.get(args.slug)
    if not result.success or result.page is None:
        print(result.error, file=sys.stderr)
        return 1

    public = result.page
    print(public.name or public.title)
    if public.name and public.title:
        print(public.title)
    if public.description:
        print(public.description)
    print()
    for view in result.links:
        print(f"- {view.label}: {view.link.url}")
    return 0


def handle_whoami(ctx: ServiceContext, args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Password: ")
    store = ctx.session_store

    result = store.sign_in(SignInInput(email=args.email, password=password))
    if not result.success or result.user is None:
        print(result.error, file=sys.stderr)
        return 1

    user = result.user
    print(f"{user.name} (@{user.username}) <{user.email}> id={user.id}")

    # Leave no server session behind
    signed_out = store.sign_out()
    if not signed_out.success:
        logger.warning(f"Sign out failed: {signed_out.error}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LinkHub CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # public
    public_parser = subparsers.add_parser("public", help="Print a public link page")
    public_parser.add_argument("slug", help="Public slug of the page")

    # whoami
    whoami_parser = subparsers.add_parser("whoami", help="Sign in and print the confirmed user")
    whoami_parser.add_argument("--email", required=True, help="Account email")
    whoami_parser.add_argument(
        "--password", help="Account password (prompted when omitted)"
    )

    return parser


def main(argv: list[str] | None = None, ctx: ServiceContext | None = None) -> int:
    args = build_parser().parse_args(argv)

    ctx = ctx or get_context()
    try:
        if args.command == "public":
            return handle_public(ctx, args)
        if args.command == "whoami":
            return handle_whoami(ctx, args)
    finally:
        ctx.close()
    return 2


if __name__ == "__main__":
    sys.exit(main())
