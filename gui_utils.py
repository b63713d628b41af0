import tkinter as tk
from tkinter import messagebox

import customtkinter as ctk

from charts import (bar_lengths, color_for_index, format_currency, format_percent,
                    pie_slices, slice_label_point)

CHART_BG = "#282a36"
CHART_FG = "#f8f8f2"
CHART_MUTED = "#6272a4"


def show_popup_info(msg, title="Information"):
    """
    Show a short information popup.
    """
    messagebox.showinfo(title, msg)


def show_popup_warning(msg, title="Warning"):
    messagebox.showwarning(title, msg)


def show_popup_error(msg, title="Error"):
    """
    Show an error popup.
    """
    messagebox.showerror(title, msg)


def show_popup_question(msg, title="Confirm"):
    """
    Yes/No popup, returns True/False
    """
    return messagebox.askyesno(title, msg)


def add_form_row(parent, row, label, show=None, width=260):
    ctk.CTkLabel(parent, text=label).grid(row=row, column=0, sticky="w", padx=10, pady=4)
    entry = ctk.CTkEntry(parent, width=width, show=show)
    entry.grid(row=row, column=1, sticky="ew", padx=10, pady=4)
    return entry


def set_entry(entry, value):
    entry.delete(0, tk.END)
    if value is not None:
        entry.insert(0, str(value))


def make_chart_canvas(parent, width=600, height=300):
    canvas = tk.Canvas(parent, bg=CHART_BG, highlightthickness=0, width=width, height=height)
    canvas.pack(fill="both", expand=True, padx=10, pady=10)
    return canvas


def _canvas_size(canvas):
    width = canvas.winfo_width()
    height = canvas.winfo_height()
    # not mapped yet, fall back to the requested size
    if width <= 1:
        width = int(canvas.cget("width"))
    if height <= 1:
        height = int(canvas.cget("height"))
    return width, height


def draw_column_chart(canvas, title, data, currency="$"):
    """Vertical bars, one per key, e.g. monthly sales."""
    canvas.delete("all")
    width, height = _canvas_size(canvas)
    canvas.create_text(10, 15, text=title, anchor="w", fill=CHART_FG, font=("Arial", 12, "bold"))
    if not data:
        canvas.create_text(width / 2, height / 2, text="No data", fill=CHART_MUTED)
        return

    peak = max(data.values())
    canvas.create_text(10, 35, text=format_currency(peak, currency), anchor="w", fill=CHART_MUTED)
    canvas.create_text(10, height - 20, text=format_currency(0, currency), anchor="w", fill=CHART_MUTED)

    left = 80
    bar_width = max((width - left) // len(data) - 10, 4)
    x = left
    for i, bar in enumerate(bar_lengths(data, height - 70)):
        y = height - 30 - bar.length
        canvas.create_rectangle(x, y, x + bar_width, height - 30, fill=color_for_index(i), width=0)
        canvas.create_text(x + bar_width / 2, height - 15, text=bar.label, fill=CHART_FG)
        x += bar_width + 10


def draw_bar_chart(canvas, title, data, value_format=str, show_percent=False):
    """Horizontal bars with the value (and optionally share of total) beside each bar."""
    canvas.delete("all")
    width, height = _canvas_size(canvas)
    canvas.create_text(10, 15, text=title, anchor="w", fill=CHART_FG, font=("Arial", 12, "bold"))
    if not data:
        canvas.create_text(width / 2, height / 2, text="No data", fill=CHART_MUTED)
        return

    total = sum(data.values())
    bar_height = 25
    left = 150
    y = 40
    for i, bar in enumerate(bar_lengths(data, max(width - left - 180, 10))):
        canvas.create_text(10, y + bar_height / 2, text=bar.label, anchor="w", fill=CHART_FG)
        canvas.create_rectangle(left, y, left + bar.length, y + bar_height, fill=color_for_index(i), width=0)
        text = value_format(bar.value)
        if show_percent and total > 0:
            text += f" ({format_percent(bar.value / total)})"
        canvas.create_text(left + bar.length + 10, y + bar_height / 2, text=text, anchor="w", fill=CHART_FG)
        y += bar_height + 10


def draw_pie_chart(canvas, title, data, currency="$"):
    canvas.delete("all")
    width, height = _canvas_size(canvas)
    canvas.create_text(10, 15, text=title, anchor="w", fill=CHART_FG, font=("Arial", 12, "bold"))
    slices = pie_slices(data)
    if not slices:
        canvas.create_text(width / 2, height / 2, text="No data", fill=CHART_MUTED)
        return

    legend_width = 260
    cx = (width - legend_width) / 2 + legend_width
    cy = height / 2
    radius = max(min(width - legend_width, height) / 2 - 30, 20)
    for i, pie_slice in enumerate(slices):
        color = color_for_index(i)
        if len(slices) == 1:
            canvas.create_oval(cx - radius, cy - radius, cx + radius, cy + radius, fill=color, width=0)
        else:
            canvas.create_arc(cx - radius, cy - radius, cx + radius, cy + radius,
                              start=pie_slice.start, extent=pie_slice.extent,
                              fill=color, outline=CHART_BG)
        lx, ly = slice_label_point(cx, cy, radius * 0.65, pie_slice)
        canvas.create_text(lx, ly, text=format_percent(pie_slice.fraction), fill=CHART_BG,
                           font=("Arial", 10, "bold"))

        legend_y = 40 + i * 22
        canvas.create_rectangle(10, legend_y, 25, legend_y + 15, fill=color, width=0)
        canvas.create_text(35, legend_y + 8, anchor="w", fill=CHART_FG,
                           text=f"{pie_slice.label} - {format_currency(pie_slice.value, currency)}")
