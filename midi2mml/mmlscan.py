# coding:utf-8
"""
This module defines a reader for the MML dialect written by
:mod:`midi2mml.mml`. It is mainly used for checking the lengths of the
emitted staves.
"""
"""
このモジュールには、:mod:`midi2mml.mml` が書き出す MML の読み取り器が
定義されています。主に、出力された各譜表の長さを検査するのに使われます。
"""
# Copyright (C) 2025  The midi2mml authors

from fractions import Fraction
from arpeggio import ZeroOrMore, RegExMatch, EOF, NonTerminal, \
                     ParserPython, NoMatch
from typing import List, Optional, Tuple
from midi2mml.duration import unit_table

__all__ = ['parse_mml', 'Staff', 'MMLError']


class MMLError(Exception):
    pass


# MML grammar begin
def mmltext(): return ZeroOrMore([comment_string, command]), EOF
def comment_string(): return RegExMatch(';[^\n]*')
def command(): return [volume, octave, timbre, tempo, rest, note, tie]
def volume(): return "v", integer
def octave(): return "o", integer
def timbre(): return "@", integer
def tempo(): return "t", integer
def rest(): return "r", length
def note(): return pitch, length
def tie(): return "&"
def pitch(): return RegExMatch(r'[a-g]\+?')
def length(): return RegExMatch(r'\d+')
def integer(): return RegExMatch(r'\d+')
# MML grammar end


class Staff(object):
    """
    One block of MML text, i.e., the commands following a comment line.

    Attributes:
        header (str or None): the comment line starting the block
            (None for commands preceding the first comment line)
        commands (list of tuple): list of (command, argument) where command
            is one of 'v', 'o', '@', 't', 'r', 'note', and '&'. The argument
            is an int for 'v', 'o', '@', and 't', the length string for 'r',
            (pitch, length string) for 'note', and None for '&'.
    """
    def __init__(self, header=None):
        self.header = header  # type: Optional[str]
        self.commands = []  # type: List[Tuple[str, object]]

    def __repr__(self):
        return "<Staff %r: %d commands>" % (self.header, len(self.commands))

    def notes(self) -> List[Tuple[str, str]]:
        return [arg for cmd, arg in self.commands if cmd == 'note']

    def duration(self, ticks_per_beat) -> int:
        """ Returns the total length of the notes and rests in ticks. """
        lengths = {lstr: length
                   for length, lstr, _ in unit_table(ticks_per_beat)}
        total = 0
        for cmd, arg in self.commands:
            if cmd == 'r' or cmd == 'note':
                lstr = arg if cmd == 'r' else arg[1]
                try:
                    total += lengths[lstr]
                except KeyError:
                    total += int(Fraction(4 * ticks_per_beat, int(lstr)))
        return total


class MMLScanner(object):
    def __init__(self):
        self.staves = []  # type: List[Staff]

    def evalnode(self, node) -> None:
        method_name = "eval_" + node.rule_name
        if hasattr(self, method_name):
            getattr(self, method_name)(node)
        elif isinstance(node, NonTerminal):
            self.evalnode(node[0])

    def current(self) -> Staff:
        if not self.staves:
            self.staves.append(Staff())
        return self.staves[-1]

    def eval_mmltext(self, node) -> None:
        for child in node:
            self.evalnode(child)

    def eval_EOF(self, node) -> None:
        pass

    def eval_comment_string(self, node) -> None:
        self.staves.append(Staff(node.value))

    def eval_volume(self, node) -> None:
        self.current().commands.append(('v', int(node[1].value)))

    def eval_octave(self, node) -> None:
        self.current().commands.append(('o', int(node[1].value)))

    def eval_timbre(self, node) -> None:
        self.current().commands.append(('@', int(node[1].value)))

    def eval_tempo(self, node) -> None:
        self.current().commands.append(('t', int(node[1].value)))

    def eval_rest(self, node) -> None:
        self.current().commands.append(('r', node[1].value))

    def eval_note(self, node) -> None:
        self.current().commands.append(('note', (node[0].value,
                                                 node[1].value)))

    def eval_tie(self, node) -> None:
        self.current().commands.append(('&', None))


parser = None


def parse_mml(text) -> List[Staff]:
    """
    Parses MML text written by :func:`.track_to_mml` and returns its
    blocks.

    Args:
        text(str): MML text

    Returns:
        list of Staff

    Raises:
        MMLError: The text has a syntax error.
    """
    """
    :func:`.track_to_mml` によって書き出されたMMLテキストを解析し、
    そのブロックのリストを返します。

    Args:
        text(str): MMLテキスト

    Returns:
        Staff のリスト

    Raises:
        MMLError: テキストに文法の誤りがあります。
    """
    global parser
    if not parser:
        parser = ParserPython(mmltext)
    try:
        parse_tree = parser.parse(text)
    except NoMatch as e:
        raise MMLError("Syntax error at position %d\n    %s ===> %s <==="
                       % (e.position, (text + '.')[:e.position],
                          (text + '.')[e.position:])) from None
    scanner = MMLScanner()
    scanner.evalnode(parse_tree)
    return scanner.staves
