"""
Repairs free-text search phrases so the OpenSearch CQL parser accepts them.

Quoted phrases pass through as typed. A parenthesised group keeps its
parentheses when its content reads as CQL and is quoted as one literal when it
doesn't. Terms of a phrase that isn't CQL are joined with 'and', and a slash
becomes its own quoted term.

    portland (film)              =>  portland (film)
    henning mortensen (f. 1939)  =>  henning and mortensen and "(f. 1939)"
    harry and (White night)      =>  harry and "(White night)"

Phrases that already are CQL come back as they went in:
    dkcclterm.sf=v and dkcclterm.uu=nt and (term.type=bog) not term.literaryForm=fiktion
"""
import logging
import re
from collections import deque

from search.replace_keys import KEY_CLOSE, KEY_OPEN, default_key_counter

logger = logging.getLogger(__name__)

# Operators must stand alone as words, so 'android' doesn't count as 'and'
CQL_OPERATORS = re.compile(r" and | any | all | adj | or | not |=|\(|\)", re.IGNORECASE)
QUOTED_PHRASE = re.compile(r'"[^"]*"')
INNERMOST_PARENTHESIS = re.compile(r"\(([^()]*)\)")
RESERVED_CHARACTERS = {"/": ' "/" '}
KEY_DELIMITERS = re.compile(f"[{KEY_OPEN}{KEY_CLOSE}]")


def is_cql(fragment: str) -> bool:
    """A lone word is fine as it is; several words need an operator between them."""
    if " " not in fragment.strip():
        return True
    return CQL_OPERATORS.search(fragment) is not None


class CqlDoctor:
    """
    Cures a single search phrase. Create one doctor per phrase.
    """

    def __init__(self, phrase: str, key_counter=None):
        # Key delimiters in the phrase itself could forge a key and make restoring loop
        phrase = KEY_DELIMITERS.sub("", phrase or "")
        self.cql_string = re.sub(r"\s+", " ", phrase.strip())
        self.key_counter = key_counter or default_key_counter
        # (key, replacement) pairs, restored in insertion order
        self.replacements = []
        self._cql = None

    def string_to_cql(self) -> str:
        """Returns the phrase in a form the CQL parser accepts."""
        if self._cql is None:
            self._fix_quotes()
            self._fix_parentheses()
            self._escape_reserved_characters()
            self._cql = self._format_cql_string()
            logger.debug(f"Cured search phrase into CQL: {self._cql}")
        return self._cql

    def _protect(self, phrase: str) -> str:
        """Registers a replacement for the phrase and returns the key that stands in for it."""
        key = self.key_counter.next_key()
        self.replacements.append((key, phrase))
        logger.debug(f"Protected fragment {phrase!r} as {key!r}")
        return key

    def _fix_quotes(self):
        self.cql_string = QUOTED_PHRASE.sub(lambda m: self._protect(m.group(0)), self.cql_string)

    def _fix_parentheses(self):
        """
        Healthy parenthesised CQL keeps its parentheses and only the content is
        protected. Anything else is quoted as one literal, parentheses included.
        """
        def protect(match):
            phrase = match.group(1)
            if not phrase:
                return match.group(0)
            if is_cql(phrase):
                return f"({self._protect(phrase)})"
            return self._protect(f'"{match.group(0)}"')

        self.cql_string = INNERMOST_PARENTHESIS.sub(protect, self.cql_string)

    def _escape_reserved_characters(self):
        for character, escaped in RESERVED_CHARACTERS.items():
            self.cql_string = self.cql_string.replace(character, escaped)

    def _format_cql_string(self) -> str:
        # Decided on the protected phrase, before any key is restored
        valid = all(is_cql(part) for part in CQL_OPERATORS.split(self.cql_string))

        expressions = self.cql_string.split(" ")
        for key, phrase in self.replacements:
            expressions = [expression.replace(key, phrase) for expression in expressions]
        expressions = self._replace_inline(expressions)
        expressions = [expression for expression in expressions if expression]

        if valid:
            return " ".join(expressions)
        return " and ".join(expressions)

    def _replace_inline(self, expressions):
        """
        Restores keys that came back inside other replacements, eg. the quote
        key inside (kat "sort hest") once the group itself is restored.
        A replacement only holds keys older than its own, so the queue drains.
        """
        if not self.replacements:
            return expressions

        replacements = dict(self.replacements)
        pending_key = re.compile("|".join(re.escape(key) for key in replacements))

        pending = deque(i for i, expression in enumerate(expressions) if pending_key.search(expression))
        while pending:
            index = pending.popleft()
            match = pending_key.search(expressions[index])
            if match is None:
                continue
            key = match.group(0)
            expressions[index] = expressions[index].replace(key, replacements[key])
            pending.append(index)
        return expressions


def string_to_cql(phrase: str, key_counter=None) -> str:
    return CqlDoctor(phrase, key_counter=key_counter).string_to_cql()
