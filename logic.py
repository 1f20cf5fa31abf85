import logging
import random
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

# Limite del valore accettato (intero senza segno a 32 bit)
MAX_GUESS = 2 ** 32 - 1

_NUMBER_RE = re.compile(r'\+?[0-9]+')


class Difficulty(Enum):
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'

    def range(self):
        """Intervallo del numero segreto, estremi inclusi."""
        return _RANGES[self]

    def attempts(self):
        """Numero massimo di tentativi."""
        return _ATTEMPTS[self]

    @property
    def label(self):
        low, high = self.range()
        return f"{self.name.capitalize()} ({low}-{high})"

    @classmethod
    def from_choice(cls, value):
        """
        Converte il valore scelto nel selettore.
        Valori sconosciuti ricadono su EASY, la scelta predefinita.
        """
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.EASY


_RANGES = {
    Difficulty.EASY: (1, 100),
    Difficulty.MEDIUM: (1, 500),
    Difficulty.HARD: (1, 1000),
}

_ATTEMPTS = {
    Difficulty.EASY: 10,
    Difficulty.MEDIUM: 9,
    Difficulty.HARD: 8,
}


class OutcomeKind(Enum):
    INVALID_INPUT = 'invalid_input'
    TOO_LOW = 'too_low'
    TOO_HIGH = 'too_high'
    CORRECT = 'correct'
    EXHAUSTED_ATTEMPTS = 'exhausted_attempts'
    ALREADY_OVER = 'already_over'


class GameState(Enum):
    ACTIVE = 'active'
    WON = 'won'
    LOST = 'lost'


_HISTORY_WORDS = {
    OutcomeKind.TOO_LOW: 'too small',
    OutcomeKind.TOO_HIGH: 'too large',
    OutcomeKind.CORRECT: 'correct',
}


@dataclass(frozen=True)
class GuessOutcome:
    kind: OutcomeKind
    remaining_attempts: int
    value: Optional[int] = None
    # Solo per EXHAUSTED_ATTEMPTS: il numero segreto e il confronto dell'ultimo tentativo
    secret: Optional[int] = None
    direction: Optional[OutcomeKind] = None

    @property
    def is_terminal(self):
        return self.kind in (OutcomeKind.CORRECT, OutcomeKind.EXHAUSTED_ATTEMPTS)

    def history_entry(self):
        """
        Riga dello storico, es. "50 (too large)".
        None per i tentativi che non contano.
        """
        kind = self.direction if self.kind is OutcomeKind.EXHAUSTED_ATTEMPTS else self.kind
        word = _HISTORY_WORDS.get(kind)
        if word is None:
            return None
        return f"{self.value} ({word})"


def parse_guess(raw):
    """Ritorna l'intero letto dal testo, oppure None se non valido."""
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    number = int(text)
    if number > MAX_GUESS:
        return None
    return number


# Gestione di una singola partita
class GameSession:
    def __init__(self, difficulty, rng=random):
        low, high = difficulty.range()
        self.difficulty = difficulty
        self.secret = rng.randint(low, high)  # Numero segreto
        self.remaining_attempts = difficulty.attempts()
        self.is_over = False
        self._won = False
        logger.debug("New game, difficulty %s, secret %d", difficulty.value, self.secret)

    @property
    def state(self):
        if not self.is_over:
            return GameState.ACTIVE
        return GameState.WON if self._won else GameState.LOST

    def guess(self, raw_input):
        """
        Valuta un tentativo del giocatore.
        Non solleva mai eccezioni: ogni esito, anche l'input non valido, è un GuessOutcome.
        """
        if self.is_over:
            return GuessOutcome(OutcomeKind.ALREADY_OVER, self.remaining_attempts)

        number = parse_guess(raw_input)
        if number is None:
            return GuessOutcome(OutcomeKind.INVALID_INPUT, self.remaining_attempts)

        self.remaining_attempts -= 1

        # Il tentativo corretto vince anche se era l'ultimo
        if number == self.secret:
            self.is_over = True
            self._won = True
            return GuessOutcome(OutcomeKind.CORRECT, self.remaining_attempts, number)

        kind = OutcomeKind.TOO_LOW if number < self.secret else OutcomeKind.TOO_HIGH
        if self.remaining_attempts == 0:
            self.is_over = True
            return GuessOutcome(OutcomeKind.EXHAUSTED_ATTEMPTS, 0, number,
                                secret=self.secret, direction=kind)
        return GuessOutcome(kind, self.remaining_attempts, number)


# Funzione per avviare un nuovo gioco
def start_new_game(difficulty, rng=random):
    """
    Inizializza una nuova partita con la difficoltà data.
    """
    return GameSession(difficulty, rng)
