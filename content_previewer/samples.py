"""
各格式的示例文档，用作空编辑区的占位文本
"""

from .types import PreviewFormat

MARKDOWN_SAMPLE = """# Sample Markdown

## Features
- **Bold text** and *italic text*
- Code blocks with syntax highlighting
- Tables and lists
- Math equations: $E = mc^2$
- Mermaid diagrams

```python
def hello():
    print("Hello, World!")
```

| Column 1 | Column 2 |
|----------|----------|
| Data 1   | Data 2   |

```mermaid
graph TD
    A[Start] --> B[Process]
    B --> C[End]
```"""

LATEX_SAMPLE = r"""\documentclass{article}
\usepackage{amsmath}

\begin{document}

\title{Sample LaTeX Document}
\author{Content Previewer}

\section{Mathematics}

Inline math: $E = mc^2$

Display math:
\begin{equation}
\int_{-\infty}^{\infty} e^{-x^2} dx = \sqrt{\pi}
\end{equation}

Matrix:
$$\begin{pmatrix}
a & b \\
c & d
\end{pmatrix}$$

\section{Text}
This is a sample LaTeX document with mathematical expressions.

\end{document}"""

HTML_SAMPLE = r"""<!DOCTYPE html>
<html>
<head>
    <title>Sample HTML</title>
    <style>
        .highlight { background: yellow; }
        .math { color: blue; font-weight: bold; }
    </style>
</head>
<body>
    <h1>Sample HTML Content</h1>

    <h2>Features</h2>
    <ul>
        <li>HTML rendering</li>
        <li><span class="highlight">Styled content</span></li>
        <li>Interactive elements</li>
    </ul>

    <h2>Math</h2>
    <p>Inline: <span class="math">$E = mc^2$</span></p>
    <p>Display: $$\int_0^1 x^2 dx = \frac{1}{3}$$</p>

    <h2>Table</h2>
    <table border="1" style="border-collapse: collapse;">
        <tr><th>Header 1</th><th>Header 2</th></tr>
        <tr><td>Cell 1</td><td>Cell 2</td></tr>
    </table>
</body>
</html>"""

SAMPLE_DOCUMENTS = {
    PreviewFormat.MARKDOWN: MARKDOWN_SAMPLE,
    PreviewFormat.LATEX: LATEX_SAMPLE,
    PreviewFormat.HTML: HTML_SAMPLE,
}
