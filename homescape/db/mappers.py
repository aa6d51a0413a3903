from typing import Any, Dict

from ..utils.coerce import to_float, to_int, to_opt_str, to_str, to_str_list


def map_listing_row(r: Dict[str, Any]) -> Dict[str, Any]:
    """Translate a raw dataset row (camelCase keys) into Listing fields."""
    return {
        "id": to_int(r.get("Id") if r.get("Id") is not None else r.get("id")),
        "title": to_str(r.get("title")),
        "address": to_str(r.get("address")),
        "city": to_str(r.get("city")),
        "state": to_str(r.get("state")),
        "zip_code": to_str(r.get("zipCode") or r.get("zip_code")).strip(),
        "price": to_float(r.get("price")),
        "bedrooms": to_int(r.get("bedrooms")),
        "bathrooms": to_float(r.get("bathrooms")),
        "square_feet": to_int(r.get("squareFeet") or r.get("square_feet")),
        "lot_size": to_int(r.get("lotSize") or r.get("lot_size")) or 0,
        "year_built": to_int(r.get("yearBuilt") or r.get("year_built")),
        "property_type": to_str(r.get("propertyType") or r.get("property_type")),
        "status": to_str(r.get("status")),
        "images": to_str_list(r.get("images")),
        "amenities": to_str_list(r.get("amenities")),
        "description": to_str(r.get("description")),
        "listed_date": to_opt_str(r.get("listedDate") or r.get("listed_date")),
        "virtual_tour_url": to_opt_str(r.get("virtualTourUrl") or r.get("virtual_tour_url")),
    }
