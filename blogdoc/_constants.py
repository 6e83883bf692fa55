"""Common literal values used across blogdoc.

These constants keep the block class names cleanup searches for, the input
suffixes the CLI accepts, and the generation prompt in one place so modules
and tests agree on them.

Examples
--------
>>> from blogdoc import _constants
>>> _constants.TOC_CLASS
'blog_index_cover'
>>> ".md" in _constants.SUPPORTED_SUFFIXES
True
"""

TOC_CLASS = "blog_index_cover"
FAQ_CLASS = "faq_blog"

SUPPORTED_SUFFIXES = frozenset({".txt", ".text", ".md", ".markdown"})

GENERATION_PROMPT = """\
Convert the document below into HTML for the blog style sheet.

Formatting rules:
- Bold text becomes <strong> inside paragraphs, never a heading.
- Italic text becomes <em>.
- Only real section titles become <h2>, <h3> or <h4>, each with an id.
- Never emit <h1>.

Special sections, only when the document names them explicitly:
- Table of contents ("TABLE OF CONTENTS", "TOC"):
  <div class="blog_index_cover"><p class="blog_index_toggle_btn fonts-16 w-700">Table Of Contents</p>
  <ol class="blog_index" style="display: none;"><li><a href="#section-id">Section Title</a></li></ol></div>
- Key takeaways ("KEY TAKEAWAYS"):
  <ul class="kta-list"><p>Key Takeaways</p><li>Point</li></ul>
- Bullet points: <ul class="bullet-new-box"><li>Point</li></ul>
- Numbered lists: <ol class="listing-bx"><li><h3>Title</h3><p>Description</p></li></ol>

Keep tables and links. Return only the HTML.

Document:
{content}
"""
