"""Common literal values used across blog_pages.

These constants keep folder names and variable keys centralized so the loader,
generator, and tests can import the same values without drifting. Intended for
internal use within the blog_pages package.

Examples
--------
>>> from blog_pages import _constants
>>> _constants.FRONT_MATTER_SEPARATOR
'---'
>>> _constants.LAYOUTS_FOLDER
'_layouts'
"""

FRONT_MATTER_SEPARATOR = "---"
CONFIG_FILE = "_config.yml"
LAYOUTS_FOLDER = "_layouts"
BASE_LAYOUT = "base.html"
INCLUDES_FOLDER = "_includes"
POSTS_FOLDER = "_posts"
POST_LAYOUT = "post"

HTML_EXTENSION = ".html"
MARKDOWN_EXTENSION = ".md"
INDEX_FILE = "index"

ID_KEY = "id"
URL_KEY = "url"
TAGS_KEY = "tags"
TITLE_KEY = "title"
LAYOUT_KEY = "layout"
CONTENT_KEY = "content"
EXCERPT_KEY = "excerpt"
EXCERPT_SEPARATOR_KEY = "excerpt_separator"
