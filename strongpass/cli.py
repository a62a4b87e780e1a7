"""CLI for StrongPass — check a password against the policy, show or initialise settings."""

import argparse
import logging
import os
import sys
from getpass import getpass

from rich import print
from rich.panel import Panel
from rich.table import Table

from .config import (
    DEFAULTS,
    PasswordConfig,
    check_consistency,
    config_path,
    load_config,
    load_config_with_source,
    save_config,
)
from .evaluator import evaluate_password
from .exc import ConfigError
from .rules import DEFAULT_RULES

logger = logging.getLogger(__name__)

EXIT_STRONG = 0
EXIT_WEAK = 1
EXIT_CONFIG = 2


def _effective_config(args) -> PasswordConfig:
    cfg = load_config(args.config)
    overrides = {}
    if args.min_length is not None:
        overrides["min_length"] = args.min_length
    if args.max_length is not None:
        overrides["max_length"] = args.max_length
    if args.min_phrase_length is not None:
        overrides["min_phrase_length"] = args.min_phrase_length
    if args.min_optional is not None:
        overrides["min_optional_tests_to_pass"] = args.min_optional
    if args.no_passphrases:
        overrides["allow_passphrases"] = False
    return cfg.replace(**overrides) if overrides else cfg


def cmd_check(args) -> int:
    try:
        cfg = _effective_config(args)
    except ConfigError as e:
        print(f"[red]Invalid configuration: {e}[/red]")
        return EXIT_CONFIG

    for w in check_consistency(cfg, len(DEFAULT_RULES.optional)):
        logger.warning("inconsistent configuration: %s", w)
        if not args.json:
            print(f"[yellow]Warning: {w}[/yellow]")

    pw = args.password if args.password is not None else getpass("Password to check (input hidden): ")
    report = evaluate_password(pw, cfg, DEFAULT_RULES)

    if args.json:
        sys.stdout.write(report.to_json() + "\n")
        return EXIT_STRONG if report.strong else EXIT_WEAK

    verdict = "[bold green]STRONG[/bold green]" if report.strong else "[bold red]NOT STRONG[/bold red]"
    body = (
        f"Optional rules passed: {report.optional_tests_passed} / {len(DEFAULT_RULES.optional)} "
        f"(need {cfg.min_optional_tests_to_pass})\n"
        f"Passphrase: {'yes' if report.is_passphrase else 'no'}"
    )
    print(Panel(body, title=f"Verdict: {verdict}"))

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", width=4)
    table.add_column("Tier")
    table.add_column("Rule")
    table.add_column("Result")
    rules = [("required", r) for r in DEFAULT_RULES.required] + [("optional", r) for r in DEFAULT_RULES.optional]
    for i, (tier, rule) in enumerate(rules):
        ok = i in report.passed_tests
        table.add_row(str(i), tier, rule.name, "[green]pass[/green]" if ok else "[red]fail[/red]")
    print(table)

    if report.errors:
        print("[bold]Problems:[/bold]")
        for e in report.errors:
            print(f" • {e}")
    return EXIT_STRONG if report.strong else EXIT_WEAK


def cmd_config_show(args) -> int:
    path = args.config or config_path()
    try:
        cfg, source = load_config_with_source(path)
    except ConfigError as e:
        print(f"[red]Invalid configuration in {path}: {e}[/red]")
        return EXIT_CONFIG
    table = Table(show_header=True, header_style="bold magenta", title=f"Settings ({source})")
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in cfg.as_dict().items():
        table.add_row(key, str(value))
    print(table)
    return 0


def cmd_config_init(args) -> int:
    path = args.config or config_path()
    if os.path.exists(path) and not args.force:
        print(f"[yellow]Settings file already exists at {path} (use --force to overwrite).[/yellow]")
        return 1
    save_config(PasswordConfig.from_dict(DEFAULTS), path)
    print(f"[green]Wrote default settings to:[/green] {path}")
    return 0


def main(argv=None) -> int:
    # accepted before or after the sub-command; SUPPRESS keeps a subparser from
    # resetting a flag given at the top level
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS, help="Enable debug logging")

    parser = argparse.ArgumentParser(prog="strongpass", parents=[common])
    sub = parser.add_subparsers(dest="cmd", required=True)

    ck = sub.add_parser("check", parents=[common], help="Check a password against the strength policy")
    ck.add_argument("password", nargs="?", help="Password to check (prompted for if omitted)")
    ck.add_argument("--config", "-c", type=str, help="Path to settings file")
    ck.add_argument("--json", action="store_true", help="Print the report as JSON")
    ck.add_argument("--min-length", type=int, help="Override minimum length")
    ck.add_argument("--max-length", type=int, help="Override maximum length")
    ck.add_argument("--min-phrase-length", type=int, help="Override passphrase length threshold")
    ck.add_argument("--min-optional", type=int, help="Override number of optional rules to pass")
    ck.add_argument("--no-passphrases", action="store_true", help="Disable the passphrase exemption")
    ck.set_defaults(func=cmd_check)

    c = sub.add_parser("config", parents=[common], help="Settings operations")
    csub = c.add_subparsers(dest="ccmd", required=True)

    c_show = csub.add_parser("show", parents=[common], help="Show the effective settings")
    c_show.add_argument("--config", "-c", type=str, help="Path to settings file")
    c_show.set_defaults(func=cmd_config_show)

    c_init = csub.add_parser("init", parents=[common], help="Write default settings to the settings file")
    c_init.add_argument("--config", "-c", type=str, help="Path to settings file")
    c_init.add_argument("--force", action="store_true", help="Overwrite an existing file")
    c_init.set_defaults(func=cmd_config_init)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
