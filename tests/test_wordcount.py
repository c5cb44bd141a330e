from qqfun.wordcount import clamp_message_count, count_words, rank_by_word_count


def test_rank_descending():
    ranked = rank_by_word_count({"甲": 1, "乙": 5, "丙": 3})
    assert [w for w, _ in ranked] == ["乙", "丙", "甲"]
    counts = [c for _, c in ranked]
    assert counts == sorted(counts, reverse=True)


def test_rank_empty():
    assert rank_by_word_count({}) == []


def test_count_words_filters():
    counts = count_words([" 你好 ", "你好", "hello", "的", "世界", "12", ""], ["的"])
    assert counts == {"你好": 2, "世界": 1}


def test_count_words_preserves_total():
    slices = ["天气", "天气", "不错"]
    counts = count_words(slices, [])
    assert sum(counts.values()) == len(slices)


def test_clamp_message_count():
    assert clamp_message_count(0) == 1000
    assert clamp_message_count(20000) == 10000
    assert clamp_message_count(500) == 500