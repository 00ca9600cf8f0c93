COURSE_MODULES = [
    {
        "id": "module-1",
        "title": "Введение в ТРИЗ",
        "theory": (
            "## Что такое ТРИЗ\n\n"
            "Теория решения изобретательских задач (ТРИЗ) предложена Г. С. Альтшуллером. "
            "Она исходит из того, что технические системы развиваются по объективным "
            "законам, а сильные решения устраняют противоречия, а не ищут компромисс.\n\n"
            "## Идеальный конечный результат\n\n"
            "ИКР описывает решение, при котором нужная функция выполняется сама собой, "
            "без затрат и вредных эффектов."
        ),
        "practice_exercises": [
            {
                "id": "ex-1-1",
                "title": "Противоречие в ручке",
                "description": (
                    "Шариковая ручка должна иметь длинный стержень, чтобы писать долго, "
                    "и короткий, чтобы быть компактной. Сформулируйте противоречие."
                ),
                "table": {
                    "headers": ["Параметр", "Требование 1", "Требование 2"],
                    "rows": [["Длина стержня", "Длинный", "Короткий"]],
                },
                "hints": [
                    {
                        "title": "Тип противоречия",
                        "content": "Это физическое противоречие: один параметр, два требования.",
                    },
                    {
                        "title": "Возможное решение",
                        "content": "Разделение в пространстве: сменный стержень или свёрнутая лента чернил.",
                    },
                ],
            },
        ],
        "practice_sections": [
            {
                "id": "p-1-1",
                "title": "Основные понятия",
                "questions": [
                    {
                        "kind": "mc",
                        "id": "p-1-1-q1",
                        "text": "Кто создал ТРИЗ?",
                        "options": [
                            {"id": "a", "label": "Г. С. Альтшуллер"},
                            {"id": "b", "label": "А. Ф. Осборн"},
                            {"id": "c", "label": "Э. де Боно"},
                        ],
                        "correct_answer": "a",
                        "explanation": "ТРИЗ разработал Генрих Саулович Альтшуллер.",
                    },
                    {
                        "kind": "free-form",
                        "id": "p-1-1-q2",
                        "text": "Как сокращённо называют идеальный конечный результат?",
                        "correct_answer": "ИКР",
                        "explanation": "ИКР — идеальный конечный результат.",
                    },
                ],
            },
        ],
        "test_sections": [
            {
                "id": "t-1-1",
                "title": "Проверка понимания",
                "questions": [
                    {
                        "kind": "mc",
                        "id": "t-1-1-q1",
                        "text": "Что ТРИЗ предлагает делать с противоречием?",
                        "options": [
                            {"id": "a", "label": "Найти компромисс"},
                            {"id": "b", "label": "Устранить его"},
                            {"id": "c", "label": "Игнорировать"},
                        ],
                        "correct_answer": "b",
                        "explanation": "Сильное решение устраняет противоречие без компромисса.",
                    },
                    {
                        "kind": "free-form",
                        "id": "t-1-1-q2",
                        "text": "Какой предмет служил примером противоречия в практике?",
                        "correct_answer": "авторучка",
                        "explanation": "В практике разбиралось противоречие в шариковой ручке.",
                    },
                    {
                        "kind": "mc",
                        "id": "t-1-1-q3",
                        "text": "Идеальная система — это система, которой...",
                        "options": [
                            {"id": "a", "label": "нет, а функция выполняется"},
                            {"id": "b", "label": "больше всех по размеру"},
                            {"id": "c", "label": "дороже всех"},
                        ],
                        "correct_answer": "a",
                        "explanation": "Идеальная система: её нет, а функция выполняется.",
                    },
                ],
            },
        ],
        "pass_criteria": {"type": "min_score", "threshold": 2, "total_questions": 3},
    },
    {
        "id": "module-2",
        "title": "Технические и физические противоречия",
        "theory": (
            "## Техническое противоречие\n\n"
            "Улучшение одного параметра системы ухудшает другой.\n\n"
            "## Физическое противоречие\n\n"
            "К одному элементу предъявляются взаимоисключающие требования. "
            "Его разрешают разделением во времени, в пространстве, в структуре "
            "или по условию."
        ),
        "practice_sections": [
            {
                "id": "p-2-1",
                "title": "Виды противоречий",
                "description": "Определите тип противоречия.",
                "questions": [
                    {
                        "kind": "mc",
                        "id": "p-2-1-q1",
                        "text": "Крыло самолёта должно быть большим для взлёта и малым для полёта. Это...",
                        "options": [
                            {"id": "a", "label": "техническое противоречие"},
                            {"id": "b", "label": "физическое противоречие"},
                        ],
                        "correct_answer": "b",
                        "explanation": "Один элемент, взаимоисключающие требования к его размеру.",
                    },
                    {
                        "kind": "free-form",
                        "id": "p-2-1-q2",
                        "text": "Каким приёмом разрешается противоречие крыла?",
                        "correct_answer": "разделение во времени",
                        "explanation": "Крыло меняет площадь на разных этапах полёта.",
                    },
                ],
            },
            {
                "id": "p-2-2",
                "title": "Разрешение противоречий",
                "questions": [
                    {
                        "kind": "free-form",
                        "id": "p-2-2-q1",
                        "text": "Назовите принцип: зонт складывается, когда не нужен.",
                        "correct_answer": "разделение во времени",
                        "explanation": "Зонт большой во время дождя и маленький в остальное время.",
                    },
                ],
            },
        ],
        "test_sections": [
            {
                "id": "t-2-1",
                "title": "Противоречия",
                "questions": [
                    {
                        "kind": "mc",
                        "id": "t-2-1-q1",
                        "text": "Улучшение мощности двигателя увеличивает его вес. Это...",
                        "options": [
                            {"id": "a", "label": "техническое противоречие"},
                            {"id": "b", "label": "физическое противоречие"},
                        ],
                        "correct_answer": "a",
                        "explanation": "Улучшение одного параметра ухудшает другой.",
                    },
                    {
                        "kind": "free-form",
                        "id": "t-2-1-q2",
                        "text": "Назовите способ разделения: мост разводится для прохода судов.",
                        "correct_answer": "разделение во времени",
                        "explanation": "Мост в разное время выполняет разные требования.",
                    },
                ],
            },
            {
                "id": "t-2-2",
                "title": "Разделение",
                "questions": [
                    {
                        "kind": "mc",
                        "id": "t-2-2-q1",
                        "text": "Пешеходный переход под дорогой — пример разделения...",
                        "options": [
                            {"id": "a", "label": "во времени"},
                            {"id": "b", "label": "в пространстве"},
                            {"id": "c", "label": "по условию"},
                        ],
                        "correct_answer": "b",
                        "explanation": "Потоки разведены на разных уровнях.",
                    },
                ],
            },
        ],
        "pass_criteria": {"type": "min_score", "threshold": 2, "total_questions": 3},
    },
    {
        "id": "module-3",
        "title": "Вепольный анализ",
        "theory": (
            "## Веполь\n\n"
            "Минимальная модель технической системы: два вещества и поле, "
            "которое обеспечивает их взаимодействие."
        ),
        "practice_sections": [
            {
                "id": "p-3-1",
                "title": "Элементы веполя",
                "questions": [
                    {
                        "kind": "free-form",
                        "id": "p-3-1-q1",
                        "text": "Сколько веществ входит в полный веполь?",
                        "correct_answer": "два",
                        "explanation": "Полный веполь содержит два вещества и поле.",
                    },
                ],
            },
        ],
        "test_sections": [
            {
                "id": "t-3-1",
                "title": "Веполи",
                "questions": [
                    {
                        "kind": "mc",
                        "id": "t-3-1-q1",
                        "text": "Что обеспечивает взаимодействие веществ в веполе?",
                        "options": [
                            {"id": "a", "label": "Поле"},
                            {"id": "b", "label": "Инструмент"},
                            {"id": "c", "label": "Оператор"},
                        ],
                        "correct_answer": "a",
                        "explanation": "Поле связывает вещества в веполе.",
                    },
                    {
                        "kind": "free-form",
                        "id": "t-3-1-q2",
                        "text": "Как называется минимальная модель технической системы в ТРИЗ?",
                        "correct_answer": "веполь",
                        "explanation": "Вещество + поле = веполь.",
                    },
                ],
            },
        ],
        "pass_criteria": {"type": "min_score", "threshold": 2, "total_questions": 2},
    },
    {
        "id": "module-4",
        "title": "Законы развития технических систем",
        "coming_soon": True,
        "pass_criteria": {"type": "min_score", "threshold": 0, "total_questions": 0},
    },
]
