from typing import Optional

from pydantic import BaseModel

from app.settings import Settings

UTTERANCES_SCRIPT = "https://utteranc.es/client.js"


class CommentWidget(BaseModel):
    src: str = UTTERANCES_SCRIPT
    repo: str
    issue_term: str
    theme: str
    path: str


def build_comment_widget(path: str, current_settings: Settings) -> Optional[CommentWidget]:
    """Utterances embed for ``path``; None when no repository is configured."""
    if not current_settings.UTTERANCES_REPO:
        return None
    return CommentWidget(
        repo=current_settings.UTTERANCES_REPO,
        issue_term=current_settings.UTTERANCES_ISSUE_TERM,
        theme=current_settings.UTTERANCES_THEME,
        path=path,
    )
