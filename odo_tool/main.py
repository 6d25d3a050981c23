from __future__ import annotations
import json
from pathlib import Path
from datetime import datetime, timezone

import typer
from rich import print
from rich.markup import escape
from rich.table import Table

from .config import DATA_DIR, LOG_FILE
from .eeprom.io import TemplateStore, read_image, save_image
from .eeprom.map import get_model, model_ids
from .eeprom.detect import detect_model
from .eeprom.recover import read_fields
from .errors import OdoToolError
from .service import build_patched_template, read_mileage

app = typer.Typer(add_completion=False, help="Odo CLI: чтение и запись пробега в дампах EEPROM.")


def _log_event(kind: str, payload: dict):
    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    record = {
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "kind": kind,
        "payload": payload,
    }
    with open(LOG_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(record, ensure_ascii=False) + "\n")


def _fail(e: Exception, command: str):
    _log_event("error", {"command": command, "type": type(e).__name__, "message": str(e)})
    print(f"[red]{escape(str(e))}[/]")
    raise typer.Exit(code=2)


@app.command()
def models(
    data_dir: Path = typer.Option(DATA_DIR, help="Каталог шаблонов"),
):
    """Показать поддерживаемые модели и наличие их шаблонов."""
    present = set(TemplateStore(data_dir).available())
    for model_id in model_ids():
        m = get_model(model_id)
        mark = "[green]есть[/]" if model_id in present else "[yellow]нет шаблона[/]"
        print(f"[cyan]{m.id}[/] - {m.template_file} ({mark}), полей: {len(m.offsets)}")


@app.command("read-km")
def read_km(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Дамп EEPROM (.bin)"),
    model: str = typer.Option(None, help="Модель (без проверки по содержимому)"),
    as_json: bool = typer.Option(False, "--json", help="Вывести результат в JSON"),
):
    """Прочитать пробег из дампа. Модель определяется автоматически, если не указана."""
    data = read_image(file)
    try:
        reading = read_mileage(data, model)
    except OdoToolError as e:
        _fail(e, "read-km")

    _log_event("read_km", {"file": str(file), "hint": model, **reading.as_dict()})
    if as_json:
        print(json.dumps(reading.as_dict(), ensure_ascii=False))
    else:
        print(f"[bold]Модель:[/] [cyan]{reading.model_id}[/]")
        print(f"[bold green]Пробег:[/] {reading.mileage} км")


@app.command("write-km")
def write_km(
    model: str = typer.Argument(..., help="Модель, напр. biz2018"),
    mileage: str = typer.Argument(..., help="Новый пробег, км"),
    out: Path = typer.Option(None, help="Куда сохранить (по умолчанию <model>_<km>km.bin)"),
    data_dir: Path = typer.Option(DATA_DIR, help="Каталог шаблонов"),
):
    """Записать пробег в шаблон модели и сохранить новый .bin."""
    store = TemplateStore(data_dir)
    try:
        result = build_patched_template(model, mileage, store)
    except OdoToolError as e:
        _fail(e, "write-km")

    try:
        saved = save_image(result.data, out or Path(result.filename))
    except OSError as e:
        _fail(e, "write-km")
    _log_event("write_km", {"model": result.model_id, "km": result.mileage, **saved})
    print(f"[green]Готово:[/] {result.mileage} км -> {saved['out']} ({saved['bytes']} байт)")


@app.command()
def fields(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Дамп EEPROM (.bin)"),
    model: str = typer.Option(None, help="Модель (по умолчанию определяется автоматически)"),
):
    """Показать все поля пробега модели и их контрольные суммы."""
    data = read_image(file)
    model_id = detect_model(data, model)
    readings = read_fields(data, get_model(model_id).offsets)

    table = Table(title=f"{file.name}: {model_id}")
    for col in ("Смещение", "Значение", "Дополнение", "CRC", "Пробег, км"):
        table.add_column(col)
    for r in readings:
        if not r.in_bounds:
            table.add_row(f"0x{r.offset:04X}", "-", "-", "[yellow]вне образа[/]", "-")
            continue
        status = "[green]OK[/]" if r.valid else "[red]ошибка[/]"
        km = str(r.mileage) if r.mileage is not None else "-"
        table.add_row(f"0x{r.offset:04X}", f"0x{r.value:04X}", f"0x{r.complement:04X}", status, km)
    print(table)

    ok = sum(1 for r in readings if r.valid)
    _log_event("fields", {"file": str(file), "model": model_id, "valid": ok, "total": len(readings)})
    print(f"[dim]Валидных полей: {ok} из {len(readings)}[/]")


if __name__ == "__main__":
    app()
