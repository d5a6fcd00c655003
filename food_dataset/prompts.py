# food_dataset/prompts.py

import re
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from .schema import IngestionRequest, LIGHT_LEVELS


INTERVAL_RE = re.compile(r"^\d+(\.\d+)?-\d+(\.\d+)?$")
SUB_INTERVAL_RE = re.compile(r"^\d+(\.\d+)?$")

# True when the answer is accepted, otherwise the message to show
Validator = Callable[[str], Union[bool, str]]
InputFn = Callable[[str], str]


def validate_video_path(answer: str) -> Union[bool, str]:
    return Path(answer.strip()).is_file() or "File not found. Please enter a valid path."


def validate_interval(answer: str) -> Union[bool, str]:
    return bool(INTERVAL_RE.match(answer.strip())) or "Please enter in format X-Y, e.g. 1-2 or 2.1-3.0"


def validate_sub_interval(answer: str) -> Union[bool, str]:
    return bool(SUB_INTERVAL_RE.match(answer.strip())) or "Please enter a numeric weight, like 1.3"


def ask(
    message: str,
    validate: Validator,
    prefilled: Optional[str] = None,
    input_fn: Optional[InputFn] = None,
) -> str:
    """
    Ask until the validator accepts the answer. A pre-filled answer (e.g. from
    the command line) is checked first and only skips the question if valid.
    Returns the stripped answer. EOFError propagates.
    """
    if prefilled is not None:
        verdict = validate(prefilled)
        if verdict is True:
            return prefilled.strip()
        print(f"[WARN] {prefilled!r}: {verdict}")

    while True:
        answer = (input_fn or input)(f"? {message} ")
        verdict = validate(answer)
        if verdict is True:
            return answer.strip()
        print(f">> {verdict}")


def select(
    message: str,
    choices: Sequence[str],
    prefilled: Optional[str] = None,
    input_fn: Optional[InputFn] = None,
) -> str:
    """Pick one of `choices`, either by its name or its 1-based number."""

    def resolve(answer: str) -> Optional[str]:
        answer = answer.strip().lower()
        if answer in choices:
            return answer
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1]
        return None

    if prefilled is not None:
        picked = resolve(prefilled)
        if picked is not None:
            return picked
        print(f"[WARN] {prefilled!r}: choose one of {', '.join(choices)}")

    print(f"? {message}")
    for i, c in enumerate(choices, start=1):
        print(f"  {i}) {c}")

    while True:
        picked = resolve((input_fn or input)("  Answer: "))
        if picked is not None:
            return picked
        print(f">> Please choose one of {', '.join(choices)} (or 1-{len(choices)})")


def collect_request(
    with_light: bool = True,
    video: Optional[str] = None,
    interval: Optional[str] = None,
    sub_interval: Optional[str] = None,
    light: Optional[str] = None,
    input_fn: Optional[InputFn] = None,
) -> IngestionRequest:
    video_answer = ask("Enter path to the video file:", validate_video_path, video, input_fn)
    video_path = Path(video_answer).resolve()
    print(f"Using video file: {video_path}")

    interval_answer = ask("Enter weight interval (e.g. 1-2):", validate_interval, interval, input_fn)
    sub_answer = ask(
        "Enter sub-interval weight (e.g. 1.3 or 1.0):",
        validate_sub_interval,
        sub_interval,
        input_fn,
    )

    light_answer = None
    if with_light:
        light_answer = select("Select lighting condition for this clip:", LIGHT_LEVELS, light, input_fn)

    return IngestionRequest(
        video_path=video_path,
        interval=interval_answer,
        sub_interval=sub_answer,
        light=light_answer,
    )
