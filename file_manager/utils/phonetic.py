"""
Phonetic ("sounds like") matching used by file search.

SQLite has no SOUNDEX operator by default, so the database layer registers
``sounds_like`` as a SQL function on every connection.
"""
import re
from typing import Optional

_CODES = {
    **dict.fromkeys('bfpv', '1'),
    **dict.fromkeys('cgjkqsxz', '2'),
    **dict.fromkeys('dt', '3'),
    'l': '4',
    **dict.fromkeys('mn', '5'),
    'r': '6',
}

_WORD_RE = re.compile(r'[a-z]+')


def soundex(value: Optional[str]) -> str:
    """
    American Soundex code of a string.

    Non-letters are ignored. Returns an empty string when the value holds no
    letters at all.
    """
    letters = ''.join(_WORD_RE.findall((value or '').lower()))
    if not letters:
        return ''

    first = letters[0]
    code = [first.upper()]
    last = _CODES.get(first, '')

    for char in letters[1:]:
        digit = _CODES.get(char, '')
        if digit and digit != last:
            code.append(digit)
            if len(code) == 4:
                break
        # h and w do not separate letters with the same code
        if char not in 'hw':
            last = digit

    return ''.join(code).ljust(4, '0')


def sounds_like(value: Optional[str], term: Optional[str]) -> int:
    """
    1 if ``term`` sounds like ``value`` or like any word within it, else 0.

    Returns an int because it is called from SQL.
    """
    target = soundex(term)
    if not target or value is None:
        return 0

    if soundex(value) == target:
        return 1

    for word in _WORD_RE.findall(value.lower()):
        if soundex(word) == target:
            return 1
    return 0
