"""Textual CSS themes for glimpse."""

APP_CSS = """
/* ── Global ────────────────────────────────── */
Screen {
    background: $background;
    align: center top;
}

/* ── Overlay Screen ────────────────────────── */
#overlay-panel {
    width: 100%;
    height: auto;
    background: $surface;
    border: round $primary;
    padding: 0 1;
}

#overlay-text {
    width: 100%;
    height: auto;
    color: $text;
}

#overlay-status {
    height: 1;
    color: $text-muted;
    text-style: italic;
}

/* ── Dialogs ───────────────────────────────── */
.menu-dialog {
    width: 70%;
    height: 70%;
    background: $surface;
    border: solid $primary;
    padding: 1 2;
}

.menu-title {
    text-align: center;
    text-style: bold;
    margin-bottom: 1;
}

.menu-list {
    height: 1fr;
}

.menu-hint {
    height: 1;
    color: $text-muted;
    text-align: center;
}

#stats-body {
    height: auto;
    padding: 1 2;
}
"""
