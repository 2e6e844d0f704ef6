import re
from functools import lru_cache
from typing import Iterator


def is_word_char(c: str) -> bool:
    """字母或十进制数字属于标识符的一部分，其余字符（包括下划线）视为单词边界"""
    return c.isalpha() or c.isdecimal()


@lru_cache(maxsize=1024)
def _ignore_case_regex(word: str) -> re.Pattern:
    return re.compile(re.escape(word), re.IGNORECASE)


def find_whole_word_offsets(line: str, word: str, case_sensitive: bool = True) -> Iterator[int]:
    """
    查找行内所有全词匹配的起始位置

    Args:
        line: 行内容
        word: 要查找的单词，空字符串不会产生任何匹配
        case_sensitive: 是否区分大小写（VB文件不区分）

    Yields:
        每个全词匹配的起始偏移量（升序）
    """
    if not word:
        return

    regex = None if case_sensitive else _ignore_case_regex(word)
    start_index = 0

    while True:
        if regex is None:
            start_index = line.find(word, start_index)
            if start_index < 0:
                return
            end_index = start_index + len(word)
        else:
            match = regex.search(line, start_index)
            if match is None:
                return
            start_index, end_index = match.start(), match.end()

        if start_index <= 0 or not is_word_char(line[start_index - 1]):
            if end_index >= len(line) or not is_word_char(line[end_index]):
                yield start_index

        # 无论是否全词匹配都跳到本次匹配末尾
        start_index = end_index
