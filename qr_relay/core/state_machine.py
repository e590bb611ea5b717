# Scan states and terminal outcomes (plain string constants)

# Line classifier: not inside a terminal-rendered QR block
IDLE = "idle"

# Line classifier: accumulating lines of a QR block until its bottom edge
CAPTURING_QR_BLOCK = "capturing_qr_block"


# Outcome: exit 0 and the credential directory was populated
SUCCESS_CONFIRMED = "success-confirmed"

# Outcome: connection was reported but no credentials appeared (exit 1)
SUCCESS_UNVERIFIED = "success-unverified"

# Outcome: exit 0 without a connection line and no credentials (exit 1)
FINISHED_NO_SUCCESS_SIGNAL = "finished-no-success-signal"

# Outcome: login process exited non-zero (code propagated)
FAILED = "failed"
