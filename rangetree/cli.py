#!/usr/bin/env python3
import logging

import click
import click.types

import rangetree
from rangetree.config import load_config
from rangetree.log import logger, logger_setup, timeit
from rangetree.ops import format_value, get_operator
from rangetree.rand import XorShift

VERBOSITY2LEVEL = {
    0: logging.WARNING,
    1: logging.INFO,
}

# command -> number of arguments
COMMANDS = {
    "update": 2,
    "range": 3,
    "query": 2,
}


@click.group(help="rangetree version " + rangetree.__version__)
@click.option("-v", "--verbose", count=True, help="Increase logging verbosity")
def main(verbose):
    logger_setup(VERBOSITY2LEVEL.get(verbose, logging.DEBUG))


class AnyIntParamType(click.types.IntParamType):
    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        try:
            return int(value, 0)
        except ValueError:
            self.fail(f"{value!r} is not a valid integer", param, ctx)


def operator_option(function):
    return click.option(
        "--operator",
        help="Combining operator, see `rangetree operators`",
    )(function)


def size_option(function):
    return click.option(
        "--size",
        type=AnyIntParamType(),
        help="Number of positions",
    )(function)


def lazy_option(function):
    return click.option(
        "--lazy/--eager",
        default=None,
        help="Support range updates [default: lazy]",
    )(function)


def resolve_operator(name, lookup=get_operator):
    try:
        return lookup(name)
    except KeyError as e:
        raise click.BadParameter(e.args[0], param_hint="--operator") from None


def parse_line(operator, lineno, line):
    words = line.split()
    command, args = words[0], words[1:]
    try:
        n_args = COMMANDS[command]
    except KeyError:
        raise click.ClickException(
            f"line {lineno}: unknown command {command!r}"
        ) from None
    if len(args) != n_args:
        raise click.ClickException(
            f"line {lineno}: {command} takes {n_args} arguments, got {len(args)}"
        )
    try:
        if command == "query":
            return command, [int(arg, 0) for arg in args]
        return command, [int(arg, 0) for arg in args[:-1]] + [
            operator.parse(args[-1])
        ]
    except ValueError as e:
        raise click.ClickException(f"line {lineno}: {e}") from None


def execute(tree, operator, input, output, log_fp):
    for lineno, line in enumerate(input, 1):
        line = line.split("#", 1)[0].strip()
        if line == "":
            continue
        command, args = parse_line(operator, lineno, line)
        try:
            if command == "update":
                tree.update(*args)
            elif command == "range":
                if not operator.idempotent:
                    raise click.ClickException(
                        f"line {lineno}: operator {operator.name} "
                        + "does not support range updates"
                    )
                tree.update_range(*args)
            else:
                result = format_value(tree.query(*args))
                output.write(f"{result}\n")
        except (IndexError, TypeError, ValueError) as e:
            raise click.ClickException(f"line {lineno}: {e}") from None
        if log_fp is not None:
            words = [command] + [format_value(arg) for arg in args]
            if command == "query":
                words += ["=", result]
            log_fp.write(" ".join(words) + "\n")


@main.command(help="Execute update and query commands against a tree")
@click.option("--config", help="INI file with tree defaults and operators")
@operator_option
@size_option
@lazy_option
@click.option(
    "-i",
    "--input",
    type=click.File("r"),
    default="-",
    help="Command script, one command per line",
)
@click.option(
    "-o",
    "--output",
    type=click.File("w"),
    default="-",
    help="Output file name",
)
@click.option(
    "--log",
    type=click.File("w"),
    help="Write every executed command into this file",
)
def run(config, operator, size, lazy, input, output, log):
    try:
        cfg = load_config(config)
    except (OSError, KeyError, ValueError, RuntimeError) as e:
        raise click.BadParameter(str(e), param_hint="--config") from None
    if operator is None:
        operator = cfg.operator
    if size is None:
        size = cfg.size
    if lazy is None:
        lazy = cfg.lazy
    if size is None:
        raise click.UsageError("Specify --size or set size in the config")
    operator = resolve_operator(operator, cfg.get_operator)
    try:
        tree = operator.make_tree(size, lazy=lazy)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--size") from None
    logger.info("Running %r with operator %s", tree, operator.name)
    execute(tree, operator, input, output, log)


@main.command(help="List the available operators")
@click.option("--config", help="INI file defining additional operators")
def operators(config):
    try:
        cfg = load_config(config)
    except (OSError, KeyError, ValueError, RuntimeError) as e:
        raise click.BadParameter(str(e), param_hint="--config") from None
    for name in cfg.operator_names():
        operator = cfg.get_operator(name)
        default = format_value(operator.default)
        range_str = " range" if operator.idempotent else ""
        click.echo(f"{name} default={default}{range_str}")


@main.command(help="Time random updates and queries")
@operator_option
@size_option
@lazy_option
@click.option(
    "--count", type=AnyIntParamType(), default="10000", help="Number of operations"
)
@click.option("--seed", type=AnyIntParamType(), help="Random seed")
@click.option(
    "--check",
    is_flag=True,
    help="Compare every query against a brute-force computation",
)
def bench(operator, size, lazy, count, seed, check):
    operator = resolve_operator("max" if operator is None else operator)
    if size is None:
        size = 1000
    if lazy is None:
        lazy = True
    try:
        tree = operator.make_tree(size, lazy=lazy)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--size") from None
    try:
        rng = XorShift(seed)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--seed") from None
    with_ranges = lazy and operator.idempotent
    values = [operator.default] * (size + 1)
    n_queries = 0
    with timeit(f"{count} operations on {tree!r}"):
        for _ in range(count):
            lo = rng.randint(1, size)
            hi = rng.randint(lo, size)
            kind = rng.randint(0, 2)
            if kind == 0:
                v = operator.parse(str(rng.randint(0, 1000)))
                tree.update(lo, v)
                if check:
                    values[lo] = operator.op(values[lo], v)
            elif kind == 1 and with_ranges:
                v = operator.parse(str(rng.randint(0, 1000)))
                tree.update_range(lo, hi, v)
                if check:
                    for i in range(lo, hi + 1):
                        values[i] = operator.op(values[i], v)
            else:
                n_queries += 1
                result = tree.query(lo, hi)
                if check:
                    expected = operator.default
                    for i in range(lo, hi + 1):
                        expected = operator.op(expected, values[i])
                    if result != expected:
                        raise click.ClickException(
                            f"query({lo}, {hi}) returned {format_value(result)}, "
                            + f"expected {format_value(expected)}"
                        )
    click.echo(f"{count} operations, {n_queries} queries, state={rng.state}")


if __name__ == "__main__":
    main()
