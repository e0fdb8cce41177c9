"""
浏览器预览页模板
加载 MathJax 3 和 Mermaid，宏表来自 MathConfig
"""

import json
from typing import Optional

from ...types import MathConfig

CONTAINER_ID = "preview"

MATHJAX_URL = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-chtml.js"
MERMAID_URL = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js"

_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
body {{ font-family: -apple-system, "Segoe UI", Helvetica, Arial, sans-serif; margin: 24px; }}
.math-display {{ margin: 1em 0; overflow-x: auto; }}
.latex-environment {{ border-left: 3px solid #d1d9e0; padding-left: 1em; margin: 1em 0; }}
.env-label {{ color: #656d76; font-family: monospace; }}
.latex-label, .latex-ref {{ color: #0969da; font-family: monospace; }}
.error {{ color: #cc0000; padding: 1rem; border: 1px solid #f8d7da; border-radius: 6px; }}
{highlight_css}
</style>
<script>
window.MathJax = {{
  tex: {{
    inlineMath: {inline_math},
    displayMath: {display_math},
    processEscapes: true,
    processEnvironments: true,
    packages: {{'[+]': ['ams', 'newcommand', 'configmacros']}},
    macros: {macros},
    tags: 'ams',
    tagSide: 'right',
    tagIndent: '0.8em',
    useLabelIds: true,
    multlineWidth: '85%'
  }},
  options: {{
    ignoreHtmlClass: 'tex2jax_ignore',
    processHtmlClass: 'tex2jax_process',
    renderActions: {{ addMenu: [0, '', ''] }}
  }},
  startup: {{
    typeset: false,
    ready: () => {{
      MathJax.startup.defaultReady();
      MathJax.startup.promise.then(() => {{ window.mathJaxReady = true; }});
    }}
  }}
}};
</script>
<script src="{mathjax_url}"></script>
<script src="{mermaid_url}"></script>
<script>
mermaid.initialize({{ startOnLoad: false, theme: 'default', securityLevel: 'loose' }});
</script>
</head>
<body>
<div id="{container_id}"></div>
</body>
</html>
"""


def build_page(config: Optional[MathConfig] = None, highlight_css: str = "") -> str:
    """生成预览页 HTML"""
    config = config or MathConfig()
    # MathJax 的宏名不带反斜杠
    macros = {name.lstrip("\\"): value for name, value in config.macros.items()}
    return _TEMPLATE.format(
        highlight_css=highlight_css,
        inline_math=json.dumps([list(pair) for pair in config.inline_delimiters]),
        display_math=json.dumps([list(pair) for pair in config.display_delimiters]),
        macros=json.dumps(macros),
        mathjax_url=MATHJAX_URL,
        mermaid_url=MERMAID_URL,
        container_id=CONTAINER_ID,
    )
