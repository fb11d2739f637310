"""Encode a project path into its Claude Code projects directory name."""


def encode_path(path: str) -> str:
    """Encode a filesystem path to a Claude project directory name.

    /home/wiz/AI/LLM → -home-wiz-AI-LLM
    """
    if not path:
        return ""
    # Replace all path separators with hyphens
    encoded = path.replace("/", "-")
    # On Windows-origin paths, also handle backslash
    encoded = encoded.replace("\\", "-")
    return encoded
