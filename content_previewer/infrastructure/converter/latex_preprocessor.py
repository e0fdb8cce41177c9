"""
LaTeX预处理器
去除导言区、文档结尾和注释
"""


class LatexPreprocessor:
    """LaTeX预处理器"""

    DOCUMENT_BEGIN = "\\begin{document}"
    DOCUMENT_END = "\\end{document}"

    def preprocess(self, text: str) -> str:
        """预处理LaTeX文本（幂等）"""
        # 1. 去除 \begin{document} 及之前的内容
        text = self._strip_preamble(text)

        # 2. 去除最后一个 \end{document} 及之后的内容
        text = self._strip_postamble(text)

        # 3. 去除注释
        text = self._strip_comments(text)

        return text.strip()

    def _strip_preamble(self, text: str) -> str:
        index = text.find(self.DOCUMENT_BEGIN)
        if index == -1:
            return text
        return text[index + len(self.DOCUMENT_BEGIN):]

    def _strip_postamble(self, text: str) -> str:
        index = text.rfind(self.DOCUMENT_END)
        if index == -1:
            return text
        return text[:index]

    def _strip_comments(self, text: str) -> str:
        """逐行去除 % 到行尾的内容，不处理 \\% 转义"""
        return "\n".join(line.partition("%")[0] for line in text.split("\n"))
