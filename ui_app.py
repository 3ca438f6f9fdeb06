"""Streamlit UI for the best price calculator."""
from __future__ import annotations

from pathlib import Path

import streamlit as st

from unitcompare import AppConfig, RowStore, SummaryStatus, describe_result, load_config

st.set_page_config(page_title="Calculadora de Mejor Precio", layout="centered")

CONFIG_PATH = Path("config/config.yaml")
CONFIG = load_config(CONFIG_PATH) if CONFIG_PATH.exists() else AppConfig()
FIELDS = ("name", "quantity", "price")


def _store() -> RowStore:
    if "store" not in st.session_state:
        st.session_state["store"] = RowStore(messages=CONFIG.messages)
    return st.session_state["store"]


def _widget_key(row_id: int, field: str) -> str:
    return f"row-{row_id}-{field}"


def _on_field_change(row_id: int, field: str) -> None:
    store = _store()
    key = _widget_key(row_id, field)
    if not store.update_field(row_id, field, st.session_state[key]):
        row = store.get(row_id)
        if row is not None:
            st.session_state[key] = getattr(row, field)


def _field_input(column, row, field: str, label: str, placeholder: str) -> None:
    key = _widget_key(row.id, field)
    st.session_state.setdefault(key, getattr(row, field))
    column.text_input(
        label,
        placeholder=placeholder,
        key=key,
        on_change=_on_field_change,
        args=(row.id, field),
        label_visibility="collapsed",
    )


def _on_remove(row_id: int) -> None:
    store = _store()
    if store.remove_row(row_id):
        for field in FIELDS:
            st.session_state.pop(_widget_key(row_id, field), None)


store = _store()

st.title("Calculadora de Mejor Precio")
st.write(
    "Compara tus productos por cantidad y precio total para encontrar el mejor costo por unidad."
)

header = st.columns([3, 2, 2, 3, 2])
for column, title in zip(header, ("Producto", "Cantidad", "Precio", "Resultado", "Acciones")):
    column.caption(title)

for row in store.rows:
    name_col, qty_col, price_col, result_col, action_col = st.columns([3, 2, 2, 3, 2])
    _field_input(name_col, row, "name", "Producto", row.placeholder)
    _field_input(qty_col, row, "quantity", "Cantidad", "0")
    _field_input(price_col, row, "price", "Precio", "0")
    result_text = describe_result(store.result_for(row.id), CONFIG.display)
    if store.is_winner(row.id):
        result_col.success(result_text)
    else:
        result_col.write(result_text)
    action_col.button(
        "Eliminar",
        key=f"remove-{row.id}",
        on_click=_on_remove,
        args=(row.id,),
        disabled=not store.can_remove,
    )

summary = store.summary
if summary is not None and summary.status is SummaryStatus.ERROR:
    st.error(summary.message)
elif summary is not None and summary.status is SummaryStatus.SUCCESS:
    st.success(summary.message)

add_col, calculate_col = st.columns(2)
add_col.button("Añadir línea", on_click=store.add_row, use_container_width=True)
calculate_col.button("Calcular", on_click=store.calculate, type="primary", use_container_width=True)
