# seed_data.py
# Loads the sample categories, questions and quizzes used for local development.
from quizapp.model import users, categories, questions, quizzes, attempts, category_performance
from quizapp.model.categories import Category
from quizapp.model.questions import Question, QuestionOption
from quizapp.model.quizzes import Quiz, QuizQuestion
from quizapp.model.users import User
from quizapp.database.db import get_ctx_db
from quizapp.database.session import SQLALCHEMY_DATABASE_URL
from quizapp.router.auth_util import get_password_hash, generate_unique_user_id


CATEGORIES = [
    ("Science", "Physics, chemistry and biology", "flask", "#4287f5"),
    ("Math", "Numbers, algebra and geometry", "calculator", "#f54242"),
    ("History", "Events that shaped our world", "scroll", "#42f59e"),
    ("Computer Science", "Programming and computing concepts", "laptop-code", "#f5a442"),
]

# (category, title, description, difficulty, [(text, options, correct index, explanation)])
QUIZZES = [
    ("Science", "Basic Science Quiz", "Test your knowledge of general science concepts", "easy", [
        ("What is the chemical symbol for water?", ["H2O", "CO2", "NaCl", "O2"], 0,
         "Water is composed of two hydrogen atoms (H) and one oxygen atom (O)."),
        ("Which planet is known as the Red Planet?", ["Venus", "Mars", "Jupiter", "Saturn"], 1,
         "Mars appears red because of iron oxide (rust) on its surface."),
        ("What is the largest organ in the human body?", ["Heart", "Liver", "Skin", "Brain"], 2,
         "The skin is the largest organ, covering about 2 square meters in adults."),
        ("Which gas do plants absorb from the atmosphere?", ["Oxygen", "Carbon Dioxide", "Nitrogen", "Hydrogen"], 1,
         "Plants absorb carbon dioxide during photosynthesis."),
        ("What is the basic unit of life?", ["Atom", "Cell", "Molecule", "Tissue"], 1,
         "Cells are the basic structural and functional units of all living organisms."),
    ]),
    ("History", "World History", "Historical events that shaped our world", "medium", [
        ("In what year did World War II end?", ["1943", "1945", "1947", "1950"], 1,
         "World War II ended in 1945."),
        ("Who was the first President of the United States?",
         ["Thomas Jefferson", "John Adams", "George Washington", "Benjamin Franklin"], 2,
         "George Washington served as the first President from 1789 to 1797."),
        ("Which ancient civilization built the pyramids at Giza?", ["Greeks", "Romans", "Mayans", "Egyptians"], 3,
         "The ancient Egyptians built the pyramids at Giza."),
        ("The Industrial Revolution began in which country?",
         ["United States", "France", "Germany", "Great Britain"], 3,
         "The Industrial Revolution began in Great Britain in the late 18th century."),
        ("Who wrote the Declaration of Independence?",
         ["Thomas Jefferson", "George Washington", "Benjamin Franklin", "John Adams"], 0,
         "Thomas Jefferson was its principal author."),
    ]),
    ("Computer Science", "Programming Fundamentals", "Essential programming concepts", "hard", [
        ("What does CPU stand for?",
         ["Central Processing Unit", "Computer Personal Unit", "Central Program Utility", "Core Processing Unit"], 0,
         "The CPU executes program instructions."),
        ("Which data structure works first-in, first-out?", ["Stack", "Queue", "Tree", "Graph"], 1,
         "A queue removes elements in insertion order."),
        ("What is the time complexity of binary search?", ["O(log n)", "O(n)", "O(n log n)", "O(1)"], 0,
         "Each step halves the search space."),
        ("Which of these is not a programming language?", ["Python", "Java", "Rust", "HTML"], 3,
         "HTML is a markup language."),
        ("How many bits are in a byte?", ["4", "8", "16", "32"], 1,
         "A byte is eight bits."),
    ]),
    ("Math", "Algebra Basics", "Fundamental algebra concepts and problem solving", "medium", [
        ("Solve for x: 2x + 3 = 7", ["2", "3", "4", "5"], 0, "2x = 4, so x = 2."),
        ("What is 3 squared?", ["6", "9", "12", "27"], 1, "3 * 3 = 9."),
        ("What is the slope of y = 5x - 2?", ["-2", "5", "2", "-5"], 1, "The slope is the coefficient of x."),
        ("Simplify: 4(x + 2)", ["4x + 2", "x + 8", "4x + 8", "4x + 6"], 2, "Distribute the 4."),
        ("What is the value of 10 / 2 + 3?", ["2", "5", "8", "13"], 2, "Division before addition: 5 + 3."),
    ]),
]


def seed(db) -> None:
    admin = db.query(User).filter(User.username == "admin").first()
    if not admin:
        admin = User(
            user_id=generate_unique_user_id(db),
            username="admin",
            email="admin@example.com",
            hashed_password=get_password_hash("password"),
            is_admin=True,
            total_quizzes_taken=0,
            average_score=0.0,
        )
        db.add(admin)

    by_name = {}
    for name, description, icon, color in CATEGORIES:
        category = db.query(Category).filter(Category.name == name).first()
        if not category:
            category = Category(name=name, description=description, icon=icon, color=color)
            db.add(category)
        by_name[name] = category
    db.flush()

    for category_name, title, description, difficulty, items in QUIZZES:
        if db.query(Quiz).filter(Quiz.title == title).first():
            continue
        category = by_name[category_name]
        links = []
        for position, (text, options, correct, explanation) in enumerate(items):
            question = Question(
                text=text,
                explanation=explanation,
                category_id=category.category_id,
                difficulty=difficulty,
                options=[
                    QuestionOption(position=i, text=option, is_correct=(i == correct))
                    for i, option in enumerate(options)
                ],
            )
            db.add(question)
            db.flush()
            links.append(QuizQuestion(question_id=question.question_id, position=position))
        db.add(Quiz(
            title=title,
            description=description,
            category_id=category.category_id,
            creator_id=admin.user_id,
            question_links=links,
        ))
    db.commit()


if __name__ == "__main__":
    with get_ctx_db(SQLALCHEMY_DATABASE_URL) as db:
        seed(db)
    print("✅ Sample data loaded.")
