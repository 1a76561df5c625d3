"""
Strategy codec: a fixed-layout ASCII string <-> decision tables and betting.

Raw layout (348 characters):
    [  0, 160)  hard table  16 rows (hard 5..20)  × 10 dealer columns
    [160, 240)  soft table   8 rows (soft 13..20) × 10 dealer columns
    [240, 340)  pair table  10 rows (2..10, A)    × 10 dealer columns
    [340, 344)  initial bankroll, 4 hex digits, big-endian
    [344, 348)  main bet, 4 hex digits, big-endian

Dealer columns run 2, 3, ..., 10, A. Rows are read row-major, so the
first ten characters are hard 5 against dealer 2..A.

Each table cell is one of H (hit), S (stand), D (double), P (split).
Hard 4 and soft 12 are left out: the only two-card hands reaching them are
2-2 and A-A, which the pair table covers.

Lookups that fall outside the encoded rows (a natural, soft 21, a bust)
default to STAND.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .cards import ACE, TEN, Card, upcard_value
from .errors import StrategyLengthError, StrategyParseError
from .hand import Hand


class PlayerAction(Enum):
    HIT = 'H'
    STAND = 'S'
    DOUBLE = 'D'
    SPLIT = 'P'


# ─── Layout ───────────────────────────────────────────────────────────────────

DEALER_UPCARDS: tuple[int, ...] = (2, 3, 4, 5, 6, 7, 8, 9, 10, 11)
HARD_TOTALS: tuple[int, ...] = tuple(range(5, 21))
SOFT_TOTALS: tuple[int, ...] = tuple(range(13, 21))
PAIR_VALUES: tuple[int, ...] = (2, 3, 4, 5, 6, 7, 8, 9, 10, 11)

DEALER_HAND_COUNT: int = len(DEALER_UPCARDS)
PLAYER_HARD_HAND_COUNT: int = len(HARD_TOTALS)
PLAYER_SOFT_HAND_COUNT: int = len(SOFT_TOTALS)
PLAYER_PAIR_HAND_COUNT: int = len(PAIR_VALUES)
PLAYER_HAND_COUNT: int = PLAYER_HARD_HAND_COUNT + PLAYER_SOFT_HAND_COUNT + PLAYER_PAIR_HAND_COUNT
HAND_COUNT: int = PLAYER_HAND_COUNT * DEALER_HAND_COUNT

BANKROLL_FIELD_LENGTH: int = 4
BET_FIELD_LENGTH: int = 4
STRATEGY_LENGTH: int = HAND_COUNT + BANKROLL_FIELD_LENGTH + BET_FIELD_LENGTH

HARD_TABLE_START: int = 0
SOFT_TABLE_START: int = HARD_TABLE_START + PLAYER_HARD_HAND_COUNT * DEALER_HAND_COUNT
PAIR_TABLE_START: int = SOFT_TABLE_START + PLAYER_SOFT_HAND_COUNT * DEALER_HAND_COUNT
BANKROLL_START: int = HAND_COUNT
BET_START: int = BANKROLL_START + BANKROLL_FIELD_LENGTH

ACTION_ALPHABET: bytes = b'HSDP'
HEX_ALPHABET: bytes = b'0123456789ABCDEF'
_HEX_DIGITS: frozenset[int] = frozenset(b'0123456789ABCDEFabcdef')

_DEALER_COLUMNS: dict[int, int] = {v: i for i, v in enumerate(DEALER_UPCARDS)}
_HARD_ROWS: dict[int, int] = {v: i for i, v in enumerate(HARD_TOTALS)}
_SOFT_ROWS: dict[int, int] = {v: i for i, v in enumerate(SOFT_TOTALS)}
_PAIR_ROWS: dict[int, int] = {v: i for i, v in enumerate(PAIR_VALUES)}


# ─── Strategy ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True, eq=False)
class Strategy:
    """Decoded strategy. Tables are (rows, 10) arrays of action characters."""
    hard_table: np.ndarray
    soft_table: np.ndarray
    pair_table: np.ndarray
    initial_bankroll: int
    main_bet: int
    raw: bytes = field(repr=False)

    def play(self, player_hand: Hand, dealer_hand: Hand) -> PlayerAction:
        """Return the tabulated action for a player hand against the dealer upcard."""
        column = _DEALER_COLUMNS.get(upcard_value(dealer_hand[0]))
        if column is None:
            return PlayerAction.STAND

        if len(player_hand) == 2 and player_hand.is_pair():
            table = self.pair_table
            row = _PAIR_ROWS.get(_pair_value(player_hand[0]))
        elif player_hand.has_soft_value():
            table = self.soft_table
            row = _SOFT_ROWS.get(player_hand.score().high)
        else:
            table = self.hard_table
            row = _HARD_ROWS.get(player_hand.score().high)

        if row is None:
            return PlayerAction.STAND
        return PlayerAction(str(table[row, column]))

    def bet(self) -> int:
        return self.main_bet

    def encode(self) -> bytes:
        return self.raw


def _pair_value(card: Card) -> int:
    if card.rank == ACE:
        return 11
    return min(card.rank, TEN)


# ─── Decoding ─────────────────────────────────────────────────────────────────

def _as_bytes(raw: bytes | bytearray | str) -> bytes:
    if isinstance(raw, str):
        try:
            return raw.encode('ascii')
        except UnicodeEncodeError as exc:
            raise StrategyParseError('strategy', raw.encode('utf-8'), 'not ASCII') from exc
    return bytes(raw)


def _parse_table(raw: bytes, start: int, rows: int, name: str) -> np.ndarray:
    chunk = raw[start:start + rows * DEALER_HAND_COUNT]
    invalid = sorted({chr(b) for b in chunk if b not in ACTION_ALPHABET})
    if invalid:
        raise StrategyParseError(name, chunk, f"unknown action(s) {invalid}")
    return np.array(list(chunk.decode('ascii')), dtype='<U1').reshape(rows, DEALER_HAND_COUNT)


def _parse_hex(raw: bytes, start: int, length: int, name: str) -> int:
    chunk = raw[start:start + length]
    if not chunk or any(b not in _HEX_DIGITS for b in chunk):
        raise StrategyParseError(name, chunk, "invalid hex")
    return int(chunk, 16)


def decode_strategy(raw: bytes | bytearray | str) -> Strategy:
    """Decode a raw 348-character encoding into a Strategy.

    Raises:
        StrategyLengthError: If len(raw) != STRATEGY_LENGTH.
        StrategyParseError: On an unknown action symbol or malformed hex field.
    """
    data = _as_bytes(raw)
    if len(data) != STRATEGY_LENGTH:
        raise StrategyLengthError(STRATEGY_LENGTH, len(data))

    return Strategy(
        hard_table=_parse_table(data, HARD_TABLE_START, PLAYER_HARD_HAND_COUNT, 'hard table'),
        soft_table=_parse_table(data, SOFT_TABLE_START, PLAYER_SOFT_HAND_COUNT, 'soft table'),
        pair_table=_parse_table(data, PAIR_TABLE_START, PLAYER_PAIR_HAND_COUNT, 'pair table'),
        initial_bankroll=_parse_hex(data, BANKROLL_START, BANKROLL_FIELD_LENGTH, 'bankroll'),
        main_bet=_parse_hex(data, BET_START, BET_FIELD_LENGTH, 'main bet'),
        raw=data,
    )


def encode_strategy(
    hard_rows: list[str],
    soft_rows: list[str],
    pair_rows: list[str],
    bankroll: int,
    bet: int,
) -> bytes:
    """Assemble a raw encoding from readable table rows and integer fields.

    Raises:
        ValueError: If a field does not fit its fixed width.
    """
    for value, width, name in ((bankroll, BANKROLL_FIELD_LENGTH, 'bankroll'),
                               (bet, BET_FIELD_LENGTH, 'bet')):
        if not 0 <= value < 16 ** width:
            raise ValueError(f"{name} {value} does not fit in {width} hex digits")
    tables = ''.join(hard_rows) + ''.join(soft_rows) + ''.join(pair_rows)
    return f"{tables}{bankroll:0{BANKROLL_FIELD_LENGTH}X}{bet:0{BET_FIELD_LENGTH}X}".encode('ascii')


def get_sequencing() -> list[bytes]:
    """Return the legal-symbol alphabet for every position of the encoding.

    Examples:
        >>> seq = get_sequencing()
        >>> len(seq)
        348
        >>> seq[0], seq[-1]
        (b'HSDP', b'0123456789ABCDEF')
    """
    return (
        [ACTION_ALPHABET] * HAND_COUNT
        + [HEX_ALPHABET] * (BANKROLL_FIELD_LENGTH + BET_FIELD_LENGTH)
    )
