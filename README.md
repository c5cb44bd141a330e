# qqfun

This package holds the logic behind a set of group-chat bot games, written in plain Python.
No module depends on a chat framework. Each one takes ordinary values and
returns text or data. Errors are raised as exceptions. You connect it to a bot
yourself. The package uses only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `qqfun.marriage`: a SQLite register for "one spouse per group per day".
  - `MarriageRegistry(path)` provides `check_update`, `reset` (one group, or
    every group with `"ALL"`), `register`, `remarry`, `divorce`, `lookup` and `roster`.
  - `lookup` returns a `Couple` (or `None`) together with a `Standing`
    (`GROOM`, `BRIDE` or `SINGLE`).
  - Helpers: `slice_name` shortens long display names, and `today_stamp`
    formats a day as `YYYY/MM/DD`.
- `qqfun.wife_rules`: the game rules, built on the register.
  - `ensure_today` resets a group's register once the day has changed.
  - `check_propose` and `check_mistress` return `None` when the move is allowed,
    or the text to reply with when it is not.
  - `pick_partner` draws a random single from the 30 most recently active members.
  - `divorce_attempt` succeeds one time in ten.
- `qqfun.reborn`: the reincarnation lottery.
  - `WeightedChooser` draws items by integer weight.
  - `load_rates` reads a JSON list of `{"name", "weight"}` records.
  - `country_chooser` builds a chooser from those rates.
  - `reborn` plays one round and returns the reply text.
- `qqfun.runcode`: runs code snippets on an online compiler service.
  - `run_code` posts the code and returns its output. It raises `RunCodeError`
    when the language is unsupported or the service reports an error.
  - `lookup_language` maps a language name to the service's id and extension,
    and `template_for` gives a hello-world template.
  - `clear_newline_suffix` and `cut_too_long` tidy up the output.
  - The service token is read from the `RUNCODE_TOKEN` environment variable.
- `qqfun.wordle`: the word-guessing game.
  - `WordleGame(target, dictionary)` allows `len(target) + 1` guesses.
  - `guess` returns `True` on a win. It raises `LengthNotEnough` or
    `UnknownWord` when a guess is rejected, and `TimesRunOut` when the last
    chance is used up. All three are `WordleError`.
  - `grid()` returns the board as rows of `(letter, Mark)`.
  - Also provided: `grade`, `load_words`, and the `COLORS` and `CLASSES` tables.
- `qqfun.score`: daily sign-in and cookie scores.
  - `ScoreDB(path)` provides `get_score`, `set_score`, `get_sign_in` (which
    returns a `SignIn`), `set_sign_in_count` and `top_scores`.
  - Helpers: `add_score` adds to a score and caps it at `SCOREMAX` (120);
    `level_for` and `next_level_score` work out levels; `hour_word` gives a
    greeting for the time of day.
- `qqfun.sleep`: good-night and good-morning ranking per group.
  - `SleepDB(path)` provides `sleep` and `get_up`. Each returns the member's
    place for the night or morning and the time since their last record.
  - Helpers: `split_duration`, `is_morning`, `is_evening`,
    `good_morning_text` and `good_night_text`.
- `qqfun.tarot`: Major Arcana draws.
  - `load_deck` parses a JSON card file into `Card`s.
  - `TarotDeck.draw` returns `(text, image URL)` pairs for distinct cards. It
    raises `ValueError` for a bad count, or for more than one card outside a group.
  - `TarotDeck.explain` gives a card's meanings.
  - `parse_count` reads an `N张` fragment.
- `qqfun.wordcount`: hot words.
  - `count_words` counts all-Chinese word slices that are not stop words.
  - `rank_by_word_count` sorts words by count.
  - `clamp_message_count` limits how many messages to read.
- `qqfun.wtf`: a catalogue of online fun tests.
  - The catalogue is `TABLE`. `new_wtf` picks one test by index, and
    `catalogue_text` lists them all.
  - `Wtf.predict` calls the service and raises `WtfError` when it refuses.
- `qqfun.ymgal`: galgame picture sets.
  - `YmgalDB(path)` provides `upsert`, `get_by_id`, `random` and `by_key`,
    each returning a `Ymgal`.
  - `forward_contents` turns a set into `("text" | "image", value)` nodes.

## Examples

```python
from qqfun.wordle import WordleGame, UnknownWord

game = WordleGame("apple", dictionary=["apple", "angle", "ample"])
try:
    won = game.guess("angle")
    print("won" if won else "keep going")
except UnknownWord:
    print("Is that really a word?")
print(game.grid())
```

```python
from datetime import datetime
from qqfun.marriage import MarriageRegistry, today_stamp

with MarriageRegistry("registry.db") as registry:
    today = today_stamp(datetime.now())
    registry.register(123, 1, 2, "alice", "bob", today)
    print(registry.roster(123))
```

## What this package does not do

- It has no bot, no command matching and no command-line program. You parse
  chat messages and send replies yourself.
- It draws no images. The marriage roster, sign-in card, score ranking,
  hot-word chart and wordle board come back as data, not pictures.
- It downloads no data files. You supply word lists, the tarot card file,
  country rates and stop words.
- `YmgalDB` only stores picture sets. It does not fetch them from any website.
- `qqfun.wordcount` does not split text into words or read message history.
  You pass in word slices that are already split.