# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .jwt_signer import JoseTokenSigner

__all__ = ["JoseTokenSigner"]
