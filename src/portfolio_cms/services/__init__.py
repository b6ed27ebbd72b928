"""Services"""

from portfolio_cms.services.albums import (
    add_album_images,
    create_album,
    delete_album,
    delete_album_image,
    list_album_images,
    list_albums,
)
from portfolio_cms.services.analytics import (
    by_country,
    by_day_of_week,
    counts_as_of,
    record_visit,
)
from portfolio_cms.services.articles import (
    add_article_images,
    create_article,
    delete_article,
    delete_article_image,
    list_article_image_filenames,
    list_articles,
)
from portfolio_cms.services.entries import create_entry, delete_entry, list_entries
from portfolio_cms.services.reconcile import sweep_orphaned_files
from portfolio_cms.services.todos import create_todo, delete_todo, list_todos, toggle_todo
from portfolio_cms.services.videos import create_video, delete_video, list_videos

__all__ = [
    "add_album_images",
    "add_article_images",
    "by_country",
    "by_day_of_week",
    "counts_as_of",
    "create_album",
    "create_article",
    "create_entry",
    "create_todo",
    "create_video",
    "delete_album",
    "delete_album_image",
    "delete_article",
    "delete_article_image",
    "delete_entry",
    "delete_todo",
    "delete_video",
    "list_album_images",
    "list_albums",
    "list_article_image_filenames",
    "list_articles",
    "list_entries",
    "list_todos",
    "list_videos",
    "record_visit",
    "sweep_orphaned_files",
    "toggle_todo",
]
