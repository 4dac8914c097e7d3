TAB_CALENDAR = "Calendar"
TAB_TODO = "To-Do"
TAB_OPTIONS = [TAB_CALENDAR, TAB_TODO]

VIEW_MONTH = "Month"
VIEW_WEEK = "Week"
VIEW_MODES = [VIEW_MONTH, VIEW_WEEK]

IMPORTANCE_OPTIONS = ["NONE", "LOW", "MEDIUM", "HIGH"]
IMPORTANCE_OPTION_LABELS = {
    "NONE": "None",
    "LOW": "Low",
    "MEDIUM": "Medium",
    "HIGH": "High",
}

# Keyed by the color_key the API sends with each item.
IMPORTANCE_COLORS = {
    "gray": {"bg": "rgba(158, 158, 158, 0.22)", "border": "#9e9e9e"},
    "blue": {"bg": "rgba(96, 148, 214, 0.24)", "border": "#6094d6"},
    "yellow": {"bg": "rgba(222, 189, 84, 0.26)", "border": "#debd54"},
    "red": {"bg": "rgba(214, 96, 96, 0.26)", "border": "#d66060"},
}

DEFAULT_ITEM_MINUTES = 60
