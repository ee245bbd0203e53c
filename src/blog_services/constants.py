"""Global constants for the blog services.

Service role names, their default ports and the default relay topology.
"""

# Service roles, one process each
ROLE_POSTS = "posts"
ROLE_COMMENTS = "comments"
ROLE_RELAY = "relay"

ROLES = (ROLE_POSTS, ROLE_COMMENTS, ROLE_RELAY)

DEFAULT_PORTS = {
    ROLE_POSTS: 4000,
    ROLE_COMMENTS: 4001,
    ROLE_RELAY: 4005,
}

DEFAULT_EVENT_BUS_URL = "http://localhost:4005"
DEFAULT_PARTICIPANTS = (
    "http://localhost:4000",
    "http://localhost:4001",
)

# Initial status of every new comment
COMMENT_STATUS_PENDING = "pending"
