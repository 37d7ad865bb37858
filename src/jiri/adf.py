"""Convert Atlassian Document Format (ADF) JSON to plain text."""

BLOCK_TYPES = {"paragraph", "heading"}


def to_plain_text(node):
    """Flatten an ADF node (or a plain string) into text.

    Paragraphs and headings end with a newline; list items render as bullets.
    """
    if node is None:
        return ""
    if isinstance(node, str):
        return node
    if not isinstance(node, dict):
        return ""

    text = node.get("text")
    if isinstance(text, str):
        return text

    content = node.get("content")
    if not isinstance(content, list):
        return ""

    parts = "".join(to_plain_text(child) for child in content)
    node_type = node.get("type", "")
    if node_type in BLOCK_TYPES:
        return parts + "\n"
    if node_type == "listItem":
        return f"• {parts.strip()}\n"
    return parts
