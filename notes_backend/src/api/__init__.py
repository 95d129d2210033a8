"""
HTTP layer of the personal notes backend.

    routes/    -> request validation and response shaping
    deps.py    -> per-request session, stores, and the bearer-token gate
    auth.py    -> token issuing and verification
    errors.py  -> error taxonomy and its JSON mapping
"""
