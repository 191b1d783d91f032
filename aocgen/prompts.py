"""Prompt templates for solution generation."""

from __future__ import annotations

from aocgen.models import Challenge

GENERATOR_SYSTEM = "You are a helpful AI assistant that generates code solutions."


def generator_user_prompt(challenge: Challenge, language: str) -> str:
    return (
        f"Write a {language} program that solves the following coding challenge:\n\n"
        f"{challenge.task}\n\n"
        "The program should read input from a file called 'input.txt' and print "
        "the output to standard output.\n\n"
        "Respond ONLY with the code surrounded by triple backticks and the language "
        "name, like this:\n"
        f"```{language}\n<YOUR CODE HERE>\n```\n"
        "Do not include any explanations or comments outside the code block."
    )


# Returned by the "test" model so the generate flow can run offline.
TEST_MODEL_RESPONSE = """\
```{language}
# Test model response for {language}
def solve():
    with open('input.txt', 'r') as file:
        input_data = file.read()
    print('Hello, World!')

if __name__ == '__main__':
    solve()
```"""
