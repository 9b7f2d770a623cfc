from __future__ import annotations

"""Static catalog: quests, open-response questions, dictation passages and
spoken-command steps shipped with the app."""

from typing import Dict, List

from ..drills.dictation import DictationContent
from ..results.schema import Quest
from ..scoring.commands import CommandStep
from ..scoring.models import Difficulty, Question

PROGRAMMING_QUIZ = "Programming Quiz"
DICTATION_LESSON = "Dictation & Listening Comprehension"
MOTION_MATH = "Motion Math Challenge"
VOICE_COMMANDS = "Voice Commands Challenge"

QUESTS: List[Quest] = [
    Quest(
        title=PROGRAMMING_QUIZ,
        description="Explain core programming concepts in your own words",
        xp_reward=250,
        duration=15,
        difficulty=Difficulty.BEGINNER,
        learning_styles=["reading"],
    ),
    Quest(
        title=DICTATION_LESSON,
        description="Listen to short passages and answer questions about them",
        xp_reward=120,
        duration=10,
        difficulty=Difficulty.BEGINNER,
        learning_styles=["auditory"],
    ),
    Quest(
        title=MOTION_MATH,
        description="Solve math problems by tilting your device in different directions",
        xp_reward=180,
        duration=15,
        difficulty=Difficulty.INTERMEDIATE,
        learning_styles=["kinesthetic", "visual"],
    ),
    Quest(
        title=VOICE_COMMANDS,
        description="Say simple code commands out loud",
        xp_reward=100,
        duration=10,
        difficulty=Difficulty.BEGINNER,
        learning_styles=["auditory", "kinesthetic"],
    ),
]

PROGRAMMING_QUESTIONS: List[Question] = [
    Question(
        text="Explain what variables are in programming and what they are used for.",
        code_example='score = 0\nname = "Player1"\nactive = True',
        difficulty=Difficulty.BEGINNER,
        category="Fundamentals",
        key_terms=("variables", "store", "data", "value", "memory", "name", "container", "change", "assign"),
        hint="variables are containers that store data in the program's memory and can change value.",
    ),
    Question(
        text="What is a function in programming and what are its benefits?",
        code_example="def area(width, height):\n    return width * height\n\nresult = area(5, 3)",
        difficulty=Difficulty.BEGINNER,
        category="Fundamentals",
        key_terms=("function", "reuse", "code", "task", "parameters", "return", "call", "modular", "organize"),
        hint="functions are reusable blocks of code that perform a specific task, can take parameters and return values.",
    ),
    Question(
        text="Explain how conditional statements (if-else) work and why they matter.",
        code_example=(
            "temperature = 25\n"
            "if temperature > 30:\n    print(\"Hot\")\n"
            "elif temperature > 20:\n    print(\"Pleasant\")\n"
            "else:\n    print(\"Cold\")"
        ),
        difficulty=Difficulty.BEGINNER,
        category="Control Flow",
        key_terms=("condition", "decision", "if", "else", "true", "false", "branch", "evaluate", "comparison"),
        hint="conditional statements let a program make decisions based on whether a condition is true or false.",
    ),
    Question(
        text="Describe the different kinds of loops and how they are used in programming.",
        code_example=(
            "for i in range(1, 6):\n    print(i)\n\n"
            "counter = 0\nwhile counter < 5:\n    counter += 1"
        ),
        difficulty=Difficulty.INTERMEDIATE,
        category="Control Flow",
        key_terms=("loop", "repeat", "for", "while", "iteration", "condition", "increment", "traverse", "collection"),
        hint="loops repeat a block of code several times, either a fixed number of times or while a condition holds.",
    ),
    Question(
        text="Explain the basic ideas of Object-Oriented Programming (OOP).",
        code_example=(
            "class Person:\n"
            "    def __init__(self, name, age):\n        self.name = name\n        self.age = age\n\n"
            "    def greet(self):\n        print(f\"Hi, I'm {self.name}\")\n\n"
            "ana = Person(\"Ana\", 25)\nana.greet()"
        ),
        difficulty=Difficulty.INTERMEDIATE,
        category="OOP",
        key_terms=("class", "object", "instance", "attribute", "method", "encapsulation", "inheritance", "polymorphism", "property"),
        hint="OOP is a paradigm built on classes and objects, where objects are instances of classes with properties and methods.",
    ),
]

DICTATION_CONTENTS: List[DictationContent] = [
    DictationContent(
        text="Programming is the process of creating a set of instructions that tell a computer how to perform a task.",
        question="What is programming?",
        options=(
            "A computer language",
            "The process of creating instructions for a computer",
            "A mobile application",
            "A type of hardware",
        ),
        correct_answer_index=1,
    ),
    DictationContent(
        text="Swift is a powerful and intuitive programming language for iOS, iPadOS, macOS, tvOS and watchOS.",
        question="Which operating systems is Swift designed for?",
        options=(
            "Only iOS",
            "Windows and Mac",
            "iOS, iPadOS, macOS, tvOS and watchOS",
            "Only web applications",
        ),
        correct_answer_index=2,
    ),
    DictationContent(
        text="A speech synthesizer lets your application speak text through the system's audio devices.",
        question="What does a speech synthesizer let an application do?",
        options=(
            "Record audio",
            "Play music",
            "Speak text through the audio devices",
            "Analyze audio frequencies",
        ),
        correct_answer_index=2,
    ),
    DictationContent(
        text="Accessibility in mobile apps is essential so that everyone, including people with disabilities, can use your app effectively.",
        question="Why is accessibility important in mobile apps?",
        options=(
            "To make the app faster",
            "So that everyone can use the app effectively",
            "To follow design rules",
            "To use less memory",
        ),
        correct_answer_index=1,
    ),
    DictationContent(
        text="Voice dictation lets people who prefer or need to interact with technology through voice commands make effective use of apps.",
        question="What benefit does voice dictation offer?",
        options=(
            "It makes apps slower",
            "It only works in English",
            "It lets people interact with technology through voice commands",
            "It completely replaces touch interfaces",
        ),
        correct_answer_index=2,
    ),
]

COMMAND_STEPS: List[CommandStep] = [
    CommandStep(
        instructions="Step 1: the command 'print hello world' prints 'hello world' to the console. Say it out loud.",
        expected_command="print hello world",
        explanation="print shows information in the console.",
    ),
    CommandStep(
        instructions="Step 2: 'let number = 10' declares a constant called number with the value 10. Say it out loud.",
        expected_command="let number = 10",
        explanation="Constants are declared with let and their value cannot change.",
    ),
    CommandStep(
        instructions="Step 3: 'var message = hello swift' declares a variable called message. Say it out loud (no quotes).",
        expected_command="var message = hello swift",
        explanation="Variables are declared with var and can change while the program runs.",
    ),
    CommandStep(
        instructions="Step 4: say 'print message' to print the contents of the message variable.",
        expected_command="print message",
        explanation="This prints the contents of the message variable to the console.",
    ),
]


def quest_index() -> Dict[str, Quest]:
    return {q.title: q for q in QUESTS}


def get_quest(title: str) -> Quest:
    for q in QUESTS:
        if q.title == title:
            return q
    raise KeyError(f"Unknown quest: {title}")
