"""Модель документа резюме: стили, runs, движок фрагментов, элементы, модули."""
