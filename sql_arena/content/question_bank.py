from typing import Dict, List

from sql_arena.schemas.quiz import Difficulty, QuestionKind, QuizQuestion

STATIC_QUIZ_QUESTIONS: Dict[str, List[QuizQuestion]] = {
    "window_functions": [
        QuizQuestion(
            id="wf_1",
            topic="Window Functions",
            difficulty=Difficulty.intermediate,
            type=QuestionKind.query_writing,
            question_text=(
                "Write a query to rank employees by salary within each department. Use `DENSE_RANK()` so that "
                "if two employees have the same salary, they share the same rank, and the next rank is sequential."
            ),
            schema_context="Table: EMPLOYEES\n- EMP_ID (INT)\n- NAME (VARCHAR)\n- DEPT_ID (INT)\n- SALARY (INT)",
            hints=["Use PARTITION BY to group by department", "Use ORDER BY to sort by salary descending"],
        ),
        QuizQuestion(
            id="wf_2",
            topic="Window Functions",
            difficulty=Difficulty.advanced,
            type=QuestionKind.query_writing,
            question_text="Calculate the 'Running Total' of sales for each sales representative, ordered by the date of sale.",
            schema_context="Table: SALES\n- SALE_ID (INT)\n- REP_ID (INT)\n- SALE_DATE (DATE)\n- AMOUNT (DECIMAL)",
            hints=["Use SUM() as a window function", "The frame should be UNBOUNDED PRECEDING to CURRENT ROW"],
        ),
    ],
    "subqueries": [
        QuizQuestion(
            id="sq_1",
            topic="Subqueries",
            difficulty=Difficulty.intermediate,
            type=QuestionKind.query_writing,
            question_text="Find the names of all products that have a price higher than the average price of ALL products.",
            schema_context="Table: PRODUCTS\n- PROD_ID (INT)\n- PROD_NAME (VARCHAR)\n- PRICE (DECIMAL)",
            hints=["Calculate the average price in a subquery", "Use > operator with the scalar result"],
        ),
        QuizQuestion(
            id="sq_2",
            topic="Subqueries",
            difficulty=Difficulty.advanced,
            type=QuestionKind.query_writing,
            question_text=(
                "List employees who earn more than the average salary of their respective department "
                "(Correlated Subquery)."
            ),
            schema_context="Table: EMPLOYEES\n- EMP_ID (INT)\n- NAME (VARCHAR)\n- DEPT_ID (INT)\n- SALARY (INT)",
            hints=[
                "The inner query needs to reference the outer query's department ID",
                "This creates an 'Outer Reference'",
            ],
        ),
    ],
    "normalization": [
        QuizQuestion(
            id="norm_1",
            topic="Normalization",
            difficulty=Difficulty.intermediate,
            type=QuestionKind.query_writing,
            question_text=(
                "Given a table `STUDENT_CLASSES (Student_ID, Student_Name, Class_ID, Class_Name)`, identify the "
                "partial dependency and write the SQL to split it into 2NF."
            ),
            schema_context=(
                "Current PK: (Student_ID, Class_ID)\nDependencies:\n- Student_ID -> Student_Name\n"
                "- Class_ID -> Class_Name"
            ),
            hints=["Student_Name depends only on part of the key", "Create separate tables for Students and Classes"],
        ),
    ],
}
