"""
Match templates with output destinations

Extra outputs are ignored. When there are more templates than outputs the
remaining templates all go to the last output, so several expansions are
appended to one file. With no outputs at all each template gets its own
"<template><extension>" file.

An output that starts with "/" is a wildcard spec that derives the output
name from the template name. The spec is a string of op letters followed by
one argument per op, separated by spaces; slashes between op letters are
ignored, so "/d/p/e out pre txt" and "/dpe out pre txt" are the same.

    d dir     put the output in directory dir
    p pre     prefix the file name          (src.tpl -> presrc.tpl)
    S suf     suffix before the extension   (src.tpl -> srcsuf.tpl)
    n name    replace the base name         (src.tpl -> name.tpl)
    e ext     replace the extension         (src.tpl -> src.ext); "/" removes it
    s suf     append to the whole name      (src.tpl -> src.tplsuf)

Ops apply left to right. A real absolute path is written with a leading
double slash: "//home/me/out.txt".
"""

import os
from typing import List

from ..config import appsettings
from ..models.pathmatch import IOPair
from .log import LOG


def outputs_match(inputs: List[str], outputs: List[str], extension: str = "") -> List[IOPair]:
    """
    Pair every input with an output name

    Args:
        inputs: Template names, in order
        outputs: Output names or wildcard specs
        extension: Default extension for derived names (settings default if empty)

    Returns:
        One IOPair per input
    """
    extension = extension or appsettings.default_extension

    if not outputs:
        return [IOPair(name, name + extension) for name in inputs]

    pairs = []
    for i, name in enumerate(inputs):
        output = outputs[i] if i < len(outputs) else outputs[-1]
        pairs.append(IOPair(name, output_resolve(name, output, extension)))
    return pairs


def output_resolve(input_name: str, output: str, extension: str) -> str:
    """Turn one output argument into a concrete name for input_name"""
    if not output.startswith('/'):
        return output

    if output.startswith('//'):
        return output[1:]

    tokens = output.split(' ')
    ops = tokens[0].replace('/', '')
    args = tokens[1:]
    if len(args) < len(ops):
        LOG(f"Wildcard '{output}' has fewer arguments than ops; using default name", level=1)
        return input_name + extension

    name = input_name
    for op, arg in zip(ops, args):
        name = wildcard_apply(name, op, arg)
    return name


def wildcard_apply(name: str, op: str, arg: str) -> str:
    """
    Apply a single wildcard op to a path

    Unknown op letters leave the name unchanged (their argument is skipped).

    Example:
        >>> wildcard_apply('src/a.tpl', 'e', 'txt')
        'src/a.txt'
    """
    head, base = os.path.split(name)
    stem, ext = os.path.splitext(base)
    if head:
        head += os.sep

    if op == 'd':
        directory = arg if arg.endswith('/') else arg + '/'
        # Drop a leading ./ or ../ whole, so the joined name has no "//"
        if name.startswith('../'):
            name = name[3:]
        elif name.startswith('./'):
            name = name[2:]
        return directory + name
    if op == 'p':
        return head + arg + base
    if op == 'S':
        return head + stem + arg + ext
    if op == 'n':
        return head + arg + ext
    if op == 'e':
        new_ext = arg if arg.startswith('.') else '.' + arg
        if new_ext == './':
            new_ext = ''
        return head + stem + new_ext
    if op == 's':
        return name + arg
    return name
