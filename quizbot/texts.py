"""User-facing message templates."""

# Reply keyboard buttons double as free-text triggers
BUTTON_START_QUIZ = "Начать викторину"
BUTTON_MY_SCORE = "Мой счет"
BUTTON_END_QUIZ = "Завершить викторину"
BUTTON_RESTART = "Пройти еще раз"

WELCOME = (
    "Добро пожаловать в викторину!\n"
    "Проверьте свои знания в разных областях.\n"
    "Каждый вопрос имеет 4 варианта ответа.\n"
    "Команды:\n"
    "/quiz - начать викторину.\n"
    "/score - посмотреть свой счет.\n"
    "Или используйте кнопки ниже:"
)

QUESTION = "Вопрос {number}/{total}:\n{question}"
ANSWERED_QUESTION = "Вопрос {number}/{total}: \n{question}\n\n{result}"

CORRECT_ANSWER = "Правильно! {encouragement}"
WRONG_ANSWER = "Неправильно. Правильный ответ: {answer}"

QUIZ_SUMMARY = (
    "Викторина завершена! \n\n"
    "Ваш результат: {score}/{total} правильных ответов\n"
    "Процент правильных ответов: {percentage}%\n\n"
    "{feedback}"
)
SCORE = (
    "Ваш результат: {score}/{total}\n"
    "Процент правильных: {percentage}%\n"
    "{feedback}"
)
NO_QUIZ_YET = "Вы еще не проходили викторину! Используйте /quiz чтобы начать."

QUIZ_ENDED_ACK = "Викторина завершена"
QUIZ_RESTARTED_ACK = "Викторина начата заново!"

# Bot command menu
COMMAND_START = "Приветствие и меню"
COMMAND_QUIZ = "Начать викторину"
COMMAND_SCORE = "Посмотреть свой счет"
