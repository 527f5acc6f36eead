from typing import List, Sequence, Tuple, Union

from .contracts import NoMessageFound

def _normalize(tokens: Sequence[str], length: int) -> List[str]:
    # недостающие слова — в начале, выравнивание по концу
    return [""] * (length - len(tokens)) + list(tokens)

def _first_word(column: Tuple[str, str, str]) -> str:
    """Первое непустое слово в порядке приоритета A, B, C."""
    return next((w for w in column if w != ""), "")

def merge(seq_a: Sequence[str], seq_b: Sequence[str], seq_c: Sequence[str]) -> Union[str, NoMessageFound]:
    """
    Восстанавливает сообщение из трёх копий с пропусками ("").
    Входные последовательности не изменяются.
    """
    max_len = max(len(seq_a), len(seq_b), len(seq_c))
    columns = zip(*(_normalize(s, max_len) for s in (seq_a, seq_b, seq_c)))
    words = [_first_word(col) for col in columns]

    if not any(words):
        return NoMessageFound(length=max_len)
    return " ".join(words).strip()
