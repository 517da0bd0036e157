"""One-time code generation and hashing.

Codes are short numeric secrets delivered by email. Only a salted bcrypt
hash is ever stored; the plaintext exists in the outbound message alone.
"""

import secrets

import bcrypt


class OneTimeCodeService:
    """Generate 6-digit codes and compare presented codes to stored hashes.

    Examples
    --------
    >>> service = OneTimeCodeService(rounds=4)
    >>> code = service.generate()
    >>> service.verify(code, service.hash(code))
    True
    """

    CODE_LENGTH = 6
    _LOWEST = 10 ** (CODE_LENGTH - 1)
    _SPAN = 9 * _LOWEST

    def __init__(self, rounds: int = 10):
        """
        Parameters
        ----------
        rounds
            bcrypt work factor. Codes expire within minutes, so this can
            stay well below the cost used for passwords.
        """
        self._rounds = rounds

    def generate(self) -> str:
        """Return a random code between 100000 and 999999."""
        return str(self._LOWEST + secrets.randbelow(self._SPAN))

    def hash(self, code: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(code.encode("utf-8"), salt).decode("utf-8")

    def verify(self, code: str, code_hash: str) -> bool:
        """Check a presented code against a stored hash.

        Returns
        -------
        True if the code matches, False otherwise (including malformed input)
        """
        if not code or len(code) != self.CODE_LENGTH or not code.isdigit():
            return False
        try:
            return bcrypt.checkpw(code.encode("utf-8"), code_hash.encode("utf-8"))
        except (ValueError, TypeError):
            # Invalid hash format
            return False
