# config.py
# Default simulation inputs

# === Contiguous allocation ===
DEFAULT_BLOCKS = [100, 500, 200, 300, 600]      # memory block sizes (KB)
DEFAULT_PROCESSES = [212, 417, 112, 426]        # process request sizes (KB)

# === Page replacement ===
DEFAULT_REFERENCE_STRING = "7,0,1,2,0,3,0,4,2,3,0,3,2"
DEFAULT_FRAME_COUNT = 3
MAX_FRAME_COUNT = 10

# === Paging ===
DEFAULT_TOTAL_MEMORY = 1000   # KB
DEFAULT_FRAME_SIZE = 100      # KB

# Process colors, indexed by the color slot the paging engine assigns
PROCESS_COLORS = [
    "#3b82f6",  # blue
    "#22c55e",  # green
    "#a855f7",  # purple
    "#f97316",  # orange
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#eab308",  # yellow
    "#ef4444",  # red
]
FREE_COLOR = "lightgray"

# Event log entries shown in the UI
EVENT_LOG_LIMIT = 20
