"""Poll result formatting utilities."""

import json
from dataclasses import asdict
from typing import List, Mapping

from git_workspace_keeper.models.state import Change


def format_poll_json(update: Mapping[str, List[Change]]) -> str:
    """
    Format pending remote changes as a pretty-printed JSON object.

    Args:
        update: Changes by project name

    Returns:
        JSON with project names sorted and changes in reported order
    """
    payload = {
        name: [asdict(change) for change in update[name]]
        for name in sorted(update)
    }
    return json.dumps(payload, indent=2)
