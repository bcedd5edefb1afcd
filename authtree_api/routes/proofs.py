"""
Proof Routes

Verify a proof document. Verification is stateless: the document names
its depth and hasher, so no tree store is consulted.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from authtree.crypto.hasher import get_hasher
from authtree.merkle.tree import verify_merkle_proof

from authtree_api.errors import InvalidRequestError
from authtree_api.models.requests import VerifyRequest
from authtree_api.models.responses import VerifyResponse


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
def verify_proof(request: VerifyRequest) -> VerifyResponse:
    """
    Verify a proof document.

    A proof whose assist list has the wrong length for its depth, or whose
    index is not a leaf, is rejected with an error response rather than
    reported as invalid.
    """
    document = request.proof
    try:
        hasher = get_hasher(document.hasher)
    except ValueError as e:
        raise InvalidRequestError(str(e), details={"hasher": document.hasher})

    valid = verify_merkle_proof(document.to_proof(), document.depth, hasher.combine)

    errors: list[str] = []
    if not valid:
        errors.append("Recomputed root does not match proof root")

    root_matches = None
    if request.root is not None:
        root_matches = document.root == request.root.lower()
        if not root_matches:
            errors.append(f"Proof root {document.root} is not {request.root.lower()}")

    logger.info(f"Verified proof for leaf {document.index}: valid={valid}")
    return VerifyResponse(
        ok=valid and root_matches is not False,
        valid=valid,
        root_matches=root_matches,
        index=document.index,
        root=document.root,
        errors=errors,
    )
