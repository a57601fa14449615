from __future__ import annotations

from pathlib import Path

from ..models.source_format import SourceFormat

"""Downloadable example CSV files, one per supported source format.

Static content: they show the header shape each parser expects and are not
derived from the import logic.
"""

__all__ = [
    "TEMPLATES",
    "template_filename",
    "template_text",
    "write_template",
]

_SHOPIFY_TEMPLATE = """\
Handle,Title,Body (HTML),Vendor,Type,Tags,Published,Option1 Name,Option1 Value,Variant SKU,Variant Grams,Variant Inventory Qty,Variant Price,Variant Compare At Price,Image Src
"example-plant","Example Plant","<p>Beautiful indoor plant</p>","Green Grass","Plants","indoor,green","TRUE","Size","Medium","PLANT-001","500","50","29.99","39.99","https://example.com/image.jpg"
"ceramic-pot","Ceramic Pot","<p>Elegant ceramic pot</p>","Green Grass","Pots","ceramic,home","TRUE","Size","Large","POT-001","1000","100","19.99","","https://example.com/pot.jpg"
"""

_WOOCOMMERCE_TEMPLATE = """\
ID,Type,SKU,Name,Published,Featured,Short description,Description,Regular price,Sale price,Categories,Tags,Images,Stock
"","simple","PLANT-001","Example Plant","1","1","Beautiful indoor plant","<p>Beautiful indoor plant for your home</p>","39.99","29.99","Plants > Mixed Plant","indoor,green","https://example.com/image.jpg","50"
"","simple","POT-001","Ceramic Pot","1","0","Elegant ceramic pot","<p>Elegant ceramic pot for your plants</p>","19.99","","Pots > Ceramic Pot","ceramic,home","https://example.com/pot.jpg","100"
"""

_STANDARD_TEMPLATE = """\
name,name_ar,category,subcategory,price,compare_at_price,discount_percentage,sku,stock_quantity,featured_image,images,tags,is_featured,is_on_sale,is_new,description,description_ar
"Example Plant","نبتة مثال","Plants","Mixed Plant",29.99,39.99,,PLANT-001,50,https://example.com/image.jpg,https://example.com/img2.jpg|https://example.com/img3.jpg,"indoor,green",true,true,false,"Beautiful indoor plant","نبتة داخلية جميلة"
"Ceramic Pot","وعاء سيراميك","Pots","Ceramic Pot",19.99,,10,POT-001,100,https://example.com/pot.jpg,,"ceramic,home",false,true,true,"Elegant ceramic pot","وعاء سيراميك أنيق"
"""

# format -> (download filename, content)
TEMPLATES: dict[SourceFormat, tuple[str, str]] = {
    SourceFormat.STANDARD: ("product_import_template.csv", _STANDARD_TEMPLATE),
    SourceFormat.SHOPIFY: ("shopify_product_template.csv", _SHOPIFY_TEMPLATE),
    SourceFormat.WOOCOMMERCE: ("woocommerce_product_template.csv", _WOOCOMMERCE_TEMPLATE),
}


def template_filename(source_format: SourceFormat) -> str:
    return TEMPLATES[source_format][0]


def template_text(source_format: SourceFormat) -> str:
    return TEMPLATES[source_format][1]


def write_template(source_format: SourceFormat, directory: Path) -> Path:
    """Write the example CSV for ``source_format`` into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    filename, content = TEMPLATES[source_format]
    path = directory / filename
    path.write_text(content, encoding="utf-8")
    return path
