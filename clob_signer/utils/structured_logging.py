"""
Credential redaction for log output.

Attached to every handler by logging_config.setup_logging().
"""

import logging
import re


class CredentialRedactionFilter(logging.Filter):
    """
    Sanitizes log records before any handler formats them.

    - Redacts secp256k1 private keys (exactly 64 hex chars, with or without 0x)
    - Redacts API secrets and passphrases given as key=value / "key": "value"
    - Redacts long base64 blobs

    Usage:
        >>> handler = logging.StreamHandler()
        >>> handler.addFilter(CredentialRedactionFilter())
        >>> logger.addHandler(handler)
    """

    # Patterns for credential detection
    PRIVATE_KEY_PATTERN = re.compile(r'(?<![0-9A-Za-z])(0x)?[0-9a-fA-F]{64}(?![0-9a-fA-F])')
    # Keep the prefix (secret=) and replace only the value
    API_SECRET_PATTERN = re.compile(
        r'((?:secret|passphrase|password|api_key|apikey)["\']?\s*[:=]\s*["\']?)[A-Za-z0-9+/=_\-]{8,}["\']?',
        re.IGNORECASE
    )
    # 0x-prefixed hex (addresses, hashes, signatures) stays readable
    BASE64_SECRET_PATTERN = re.compile(r'(?<![A-Za-z0-9+/_\-])(?!0x)[A-Za-z0-9+/_\-]{40,}={0,2}')

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Sanitize message, args and cached traceback text.

        Returns:
            Always True (record is never dropped, just sanitized)
        """
        if record.msg:
            record.msg = self.redact(str(record.msg))

        # Non-string args are left alone so %d/%f placeholders still format
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: self._redact_arg(v) for k, v in record.args.items()
                }
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_arg(arg) for arg in record.args)

        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)

        return True

    def _redact_arg(self, value):
        if isinstance(value, (str, bytes)):
            return self.redact(value if isinstance(value, str) else value.decode("utf-8", "replace"))
        return value

    def redact(self, text: str) -> str:
        """Return text with keys, API secrets and base64 blobs masked."""
        if not text:
            return text

        # Private keys first: most critical
        text = self.PRIVATE_KEY_PATTERN.sub(
            lambda match: '0x[REDACTED]' if match.group(1) else '[REDACTED]',
            text
        )

        text = self.API_SECRET_PATTERN.sub(r'\1[REDACTED]', text)

        text = self.BASE64_SECRET_PATTERN.sub(
            lambda match: match.group(0)[:8] + '...[REDACTED]',
            text
        )

        return text
