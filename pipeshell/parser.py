from dataclasses import dataclass
from typing import Optional

from pipeshell.config import ARGS_SIZE
from pipeshell.errors import LaunchError, ParseError
from pipeshell.tokenizer import CONTROL_TOKENS, PIPE, REDIRECT, tokenize


@dataclass
class PipelineDescriptor:
    """
    A parsed line ready for execution.

    stage1 always holds at least one word. stage2 is set only for
    `a | b`. redirect_target always applies to the last stage's stdout.
    """
    stage1: list
    stage2: Optional[list] = None
    redirect_target: Optional[str] = None
    background: bool = False
    text: str = ""

    @property
    def piped(self):
        return self.stage2 is not None

    @property
    def command(self):
        return self.stage1[0]

    @property
    def final_stage(self):
        return self.stage2 if self.piped else self.stage1

    def words(self):
        """Non-control tokens in their original order"""
        return list(self.stage1) + list(self.stage2 or [])


def build(tokens, background=False, text=""):
    """
    Build a PipelineDescriptor from tokens.
    Returns None for an empty line.
    """
    if not tokens:
        if background:
            raise LaunchError("cannot background an empty command")
        return None

    stages = [[]]
    redirect_target = None

    it = iter(tokens)
    for tok in it:
        if tok == REDIRECT:
            redirect_target = next(it, None)
            if redirect_target is None or redirect_target in CONTROL_TOKENS:
                raise ParseError("missing redirect target")
        elif tok == PIPE:
            if not stages[-1] or len(stages) > 1:
                raise ParseError("misplaced pipe")
            stages.append([])
        else:
            stages[-1].append(tok)

    if not stages[-1]:
        if len(stages) > 1:
            raise ParseError("missing command after pipe")
        raise ParseError("missing command")

    return PipelineDescriptor(
        stage1=stages[0],
        stage2=stages[1] if len(stages) > 1 else None,
        redirect_target=redirect_target,
        background=background,
        text=text,
    )


def parse_command(line, capacity=ARGS_SIZE):
    """
    Parse a raw input line.
    Returns: PipelineDescriptor or None if there is nothing to run
    """
    tokens, background = tokenize(line, capacity)
    return build(tokens, background, text=line.strip())
