"""Use-case for ending a session."""

from __future__ import annotations

from authflow.shared.logging import logger


class SignOutUseCase:
    # Tokens are stateless and never stored, so there is nothing to revoke;
    # the client discards its copy.
    def execute(self) -> None:
        logger.info("auth.sign_out: ok")
