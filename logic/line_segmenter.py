from typing import Iterable, NamedTuple, Tuple


class Span(NamedTuple):
    """行内的一段匹配区间 [start, end)"""
    start: int
    end: int


def span_distance(first: Span, second: Span) -> int:
    """两段区间之间的间隔，与先后顺序无关"""
    return min(abs(first.end - second.start), abs(first.start - second.end))


def get_line_segments(line: str, first_offsets: Iterable[int], first_length: int,
                      second_offsets: Iterable[int], second_length: int) -> Tuple[str, ...]:
    """
    选出距离最近的一对匹配，并把行拆分为五段

    Args:
        line: 行内容
        first_offsets: 第一个词（基础名称）的起始位置
        first_length: 第一个词的长度
        second_offsets: 第二个词（条目键）的起始位置
        second_length: 第二个词的长度

    Returns:
        (前文, 靠前的匹配, 中间文本, 靠后的匹配, 后文)

    Raises:
        ValueError: 任一位置序列为空
    """
    first_spans = [Span(offset, offset + first_length) for offset in first_offsets]
    second_spans = [Span(offset, offset + second_length) for offset in second_offsets]

    if not first_spans or not second_spans:
        raise ValueError("get_line_segments requires at least one offset for each word")

    # 距离相同时取第一个词位置最小、其次第二个词位置最小的组合
    first, second = min(
        ((f, s) for f in first_spans for s in second_spans),
        key=lambda pair: (span_distance(*pair), pair[0].start, pair[1].start),
    )

    if first.start < second.start:
        return split_line(line, first.start, first.end, second.start, second.end)
    return split_line(line, second.start, second.end, first.start, first.end)


def split_line(line: str, x0: int, x1: int, x2: int, x3: int) -> Tuple[str, ...]:
    """按四个位置切分成五段，首段去掉前导空白、末段去掉尾随空白"""
    # 两段区间重叠时，靠后区间从靠前区间的末尾开始
    x2 = max(x2, x1)
    x3 = max(x3, x2)
    return (
        line[:x0].lstrip(),
        line[x0:x1],
        line[x1:x2],
        line[x2:x3],
        line[x3:].rstrip(),
    )
