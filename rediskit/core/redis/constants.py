"""Protocol tokens and fixed limits shared by the Redis command modules."""

# Maximum fields per HMGET request. Bounded by server command-line and reply
# size limits; larger field lists are split into sequential chunks.
HMGET_CHUNK_SIZE = 32

# SET modifiers
EX_SECONDS = "EX"
PX_MILLISECONDS = "PX"
NOT_EXISTS = "NX"

# Reply markers
OK_REPLY = b"OK"

# Sorted-set / scan modifiers
WITHSCORES = "WITHSCORES"
LIMIT = "LIMIT"
WEIGHTS = "WEIGHTS"
AGGREGATE = "AGGREGATE"
MATCH = "MATCH"
COUNT = "COUNT"

# Cursors are unsigned 64-bit integers
MAX_CURSOR = 2**64 - 1

# Reply decoders expect RESP2 flat arrays; RESP3 returns maps and nested pairs
RESP2 = 2
