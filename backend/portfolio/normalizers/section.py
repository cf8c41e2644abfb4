def normalize_section(section):
    return {
        "id": section.id,
        "name": section.name,
        "is_visible": section.is_visible,
        "order_index": section.order_index,
    }
