import re

from core.types import SearchParameter

CLIENT_TITLE = "Acronym Lookup"
CLIENT_PROMPT = "search (sf=<acronym>)> "

# Acromine dictionary service
ENDPOINT_PATH = "http://www.nactem.ac.uk/software/acromine/dictionary.py"
REQUEST_HEADERS = {"Content-Type": "application/json"}

# Search terms look like "sf=hmm" or "lf=heavy meromyosin"
QUERY_PARAMETERS: tuple[SearchParameter, ...] = ("sf", "lf")
QUERY_SEPARATOR = "="

# Trimmed from both ends of a search term: ASCII punctuation, not symbols such as "=" or "+"
QUERY_TRIM_CHARACTERS = "!\"#%&'()*,-./:;?@[\\]_{}"

# Left unencoded in search terms: "?" and "/" are legal in a query (RFC 3986, section 3.4)
QUERY_SAFE_CHARACTERS = "=/?"

# Everything a query component may contain once percent-encoded
QUERY_PATTERN = re.compile(r"(?:[A-Za-z0-9\-._~!$&'()*+,;=:@/?]|%[0-9A-Fa-f]{2})*")

# Wire keys of a long form record
LONG_FORM_KEYS: tuple[str, ...] = ("lf", "freq", "since")

# Seconds between queue polls while waiting for a lookup
WAIT_POLL_INTERVAL = 0.05

# Seconds the transport waits for each running transfer when closing
CLOSE_JOIN_TIMEOUT = 1.0

INDENT = "    "
