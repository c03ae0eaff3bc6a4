"""
El Corte Inglés (ES) 추출기 테스트 (fixture HTML)
"""

from bookrank.tools.scrapers.providers.elcorteingles import (
    ADAPTER,
    CORTE_INGLES,
    CorteInglesDetailExtractor,
    CorteInglesListExtractor,
)

PLACEHOLDER_GIF = "data:image/gif;base64,R0lGODlhAQABAAAAACw="


def _item(i: int, title: str | None = None, brand: str | None = None, img: str | None = None) -> str:
    title = title if title is not None else f"Título {i}"
    brand = brand if brand is not None else f"Autor {i}"
    img = img if img is not None else f'<img src="//sgfm.elcorteingles.es/SGFM/{i}.jpg">'
    return (
        '<div class="product_preview">'
        f'<a class="js-product-click" href="/libros/A{i}-libro-{i}/">{img}</a>'
        f'<p class="product_preview-brand">{brand}</p>'
        f'<h2 class="product_preview-title">{title}</h2>'
        "</div>"
    )


def _page(*items: str) -> str:
    return f"<html><body>{''.join(items)}</body></html>"


class TestCorteInglesListExtractor:
    def setup_method(self):
        self.extractor = CorteInglesListExtractor(CORTE_INGLES)

    def test_parses_fields(self):
        books = self.extractor.extract(_page(_item(1, title="Alas de hierro", brand="Rebecca Yarros")))

        assert len(books) == 1
        assert books[0].title == "Alas de hierro"
        assert books[0].author == "Rebecca Yarros"
        assert books[0].image == "https://sgfm.elcorteingles.es/SGFM/1.jpg"
        assert books[0].link == "https://www.elcorteingles.es/libros/A1-libro-1/"

    def test_title_in_brand_slot_swapped(self):
        books = self.extractor.extract(
            _page(_item(1, title="", brand="La historia interminable edición especial"))
        )
        assert books[0].title == "La historia interminable edición especial"
        assert books[0].author == "Autor desconocido"

    def test_short_brand_not_swapped(self):
        img = '<img src="//sgfm.elcorteingles.es/1.jpg" alt="Desde la imagen">'
        books = self.extractor.extract(_page(_item(1, title="", brand="Autor corto", img=img)))
        assert books[0].title == "Desde la imagen"
        assert books[0].author == "Autor corto"

    def test_lazy_image_from_data_src(self):
        img = f'<img src="{PLACEHOLDER_GIF}" data-src="//sgfm.elcorteingles.es/lazy.jpg">'
        books = self.extractor.extract(_page(_item(1, img=img)))
        assert books[0].image == "https://sgfm.elcorteingles.es/lazy.jpg"

    def test_placeholder_images_rejected(self):
        html = _page(
            _item(1, img=f'<img src="{PLACEHOLDER_GIF}">'),
            _item(2, img='<img src="/img/blank.gif">'),
            _item(3, img=""),
            _item(4),
        )
        assert [b.title for b in self.extractor.extract(html)] == ["Título 4"]

    def test_author_placeholder(self):
        books = self.extractor.extract(_page(_item(1, brand="")))
        assert books[0].author == "Autor desconocido"

    def test_limit_and_dedupe(self):
        items = [_item(i, title="Igual" if i % 2 == 0 and i < 6 else None) for i in range(26)]
        books = self.extractor.extract(_page(*items))
        assert len(books) == 20
        assert [b.title for b in books].count("Igual") == 1


SYNOPSIS = (
    "Una novela sobre la memoria y la familia que recorre tres generaciones de mujeres "
    "en un pueblo de Castilla, donde cada secreto guardado acaba saliendo a la luz con el "
    "paso de los años y la llegada de una carta inesperada."
)

DETAIL_HTML = f"""
<html><body>
<div class="product_detail">
  <div class="product_detail-title">Características</div>
  <dl class="block__container"><dt>Sinopsis</dt><dd>{SYNOPSIS}</dd></dl>
  <dl class="block__container">
    <dt>ISBN:</dt><dd>9788401027321</dd>
    <dt>Editorial:</dt><dd>Plaza &amp; Janés</dd>
    <dt>Nº de páginas:</dt><dd>320</dd>
    <dt>Dimensiones:</dt><dd>15 x 23 cm</dd>
  </dl>
</div>
</body></html>
"""


class TestCorteInglesDetailExtractor:
    def setup_method(self):
        self.extractor = CorteInglesDetailExtractor(CORTE_INGLES)

    def test_parses_detail(self):
        detail = self.extractor.extract(DETAIL_HTML)

        assert SYNOPSIS in detail.description
        assert detail.isbn == "9788401027321"
        assert detail.publisher == "Plaza & Janés"
        assert detail.pageCount == "320"
        assert detail.dimensions == "15 x 23 cm"
        assert detail.characteristics.startswith("Características")

    def test_response_includes_extra_fields(self):
        response = self.extractor.extract(DETAIL_HTML).to_response()
        assert {"characteristics", "dimensions", "pageCount", "isbn"} <= set(response)
        assert "plot" not in response

    def test_description_from_paragraph(self):
        paragraph = "Este libro reúne las memorias de una autora que " + "x" * 80
        detail = self.extractor.extract(f"<html><body><p>{paragraph}</p></body></html>")
        assert detail.description == paragraph
        assert detail.characteristics == ""
        assert detail.isbn == ""

    def test_description_from_any_block(self):
        text = "y" * 160
        html = f'<html><body><dl class="block__container"><dd>{text}</dd></dl></body></html>'
        assert self.extractor.extract(html).description == text

    def test_spec_block_not_used_as_description(self):
        block = "ISBN: 9788401027321 " + "z" * 200
        html = f'<html><body><dl class="block__container"><dd>{block}</dd></dl></body></html>'
        assert self.extractor.extract(html).description == ""


class TestCorteInglesAdapter:
    def test_list_wait_handles_cookie_banner_and_lazy_images(self):
        wait = ADAPTER.list_wait
        assert wait.wait_until == "domcontentloaded"
        assert wait.cookie_selector == "#onetrust-accept-btn-handler"
        assert wait.ready_selector == ".product_preview"
        assert wait.scrolls[0].incremental is True
        assert ADAPTER.list_stealth is True
