import pytest

from htmlchain import EMPTY_SENTINEL, ConversionError, ErrorKind, convert_html_to_code

COMPLEX_COMPONENT = """<div class="app">
    <h1 v-if="showTitle" class="title">{{ title }}</h1>
    <ul class="list">
        <li v-for="(item, index) in items" :key="index" @click="selectItem(item)" class="item">
            {{ item.name }} - {{ item.price }}
        </li>
    </ul>
    <input v-model="newItem" type="text" class="input" placeholder="Add new item">
    <button @click="addItem" class="btn">Add</button>
</div>"""

COMPLEX_COMPONENT_CODE = (
    'htmlgo.Div('
    'htmlgo.H1().Class("title").Attr("v-if", "showTitle").Attr("v-text", " title "), '
    'htmlgo.Ul(htmlgo.Li().Class("item").Attr("v-for", "(item, index) in items")'
    '.Attr(":key", "index").Attr("@click", "selectItem(item)")'
    '.Attr("v-text", " item.name  -  item.price ")).Class("list"), '
    'htmlgo.Input("").Type("text").Class("input").Attr("placeholder", "Add new item")'
    '.Attr("v-model", "newItem"), '
    'htmlgo.Button(htmlgo.Text("Add")).Class("btn").Attr("@click", "addItem")'
    ').Class("app")'
)

PLAIN_CASES = [
    (
        '<div class="container">Hello</div>',
        'htmlgo.Div(htmlgo.Text("Hello")).Class("container")',
    ),
    (
        """<div class="container">
            <h1 class="title">Hello</h1>
            <p class="text">World</p>
        </div>""",
        'htmlgo.Div(htmlgo.H1(htmlgo.Text("Hello")).Class("title"), '
        'htmlgo.P(htmlgo.Text("World")).Class("text")).Class("container")',
    ),
    (
        '<input type="text" id="username" class="input" placeholder="Enter username" required>',
        'htmlgo.Input("").Type("text").Id("username").Class("input")'
        '.Attr("placeholder", "Enter username").Attr("required", "required")',
    ),
    ("<div></div>", "htmlgo.Div()"),
    (
        '<div style="color: red; font-size: 16px;">Test</div>',
        'htmlgo.Div(htmlgo.Text("Test")).Style("color: red; font-size: 16px;")',
    ),
    ("<div>&lt;Hello&gt;</div>", 'htmlgo.Div(htmlgo.Text("<Hello>"))'),
    (
        '<div data-test="value">Content</div>',
        'htmlgo.Div(htmlgo.Text("Content")).Attr("data-test", "value")',
    ),
    (
        '<input type="checkbox" checked disabled>',
        'htmlgo.Input("").Type("checkbox").Attr("checked", "checked").Attr("disabled", "disabled")',
    ),
    (
        '<slot name="header">Default header</slot>',
        'htmlgo.Slot(htmlgo.Text("Default header")).Attr("name", "header")',
    ),
    (
        '<div class="container">Hello World',
        'htmlgo.Div(htmlgo.Text("Hello World")).Class("container")',
    ),
]

TEMPLATE_CASES = [
    (
        '<div v-if="isVisible" class="container">Content</div>',
        'htmlgo.Div(htmlgo.Text("Content")).Class("container").Attr("v-if", "isVisible")',
    ),
    (
        '<li v-for="item in items" class="item">{{ item.name }}</li>',
        'htmlgo.Li().Class("item").Attr("v-for", "item in items").Attr("v-text", " item.name ")',
    ),
    (
        '<input v-model="message" type="text" class="input">',
        'htmlgo.Input("").Type("text").Class("input").Attr("v-model", "message")',
    ),
    (
        '<img :src="imageUrl" :alt="imageAlt" class="image">',
        'htmlgo.Img().Class("image").Attr(":src", "imageUrl").Attr(":alt", "imageAlt")',
    ),
    (
        '<button @click="handleClick" class="btn">Click Me</button>',
        'htmlgo.Button(htmlgo.Text("Click Me")).Class("btn").Attr("@click", "handleClick")',
    ),
    (
        '<p class="text">{{ message }}</p>',
        'htmlgo.P().Class("text").Attr("v-text", " message ")',
    ),
    (
        '<input v-model="form.name" :placeholder="placeholderText" @input="validateInput" '
        'type="text" class="form-control">',
        'htmlgo.Input("").Type("text").Class("form-control").Attr("v-model", "form.name")'
        '.Attr(":placeholder", "placeholderText").Attr("@input", "validateInput")',
    ),
    (
        "<div :class=\"{ active: isActive, 'text-danger': hasError }\" class=\"base\">Content</div>",
        'htmlgo.Div(htmlgo.Text("Content")).Class("base")'
        ".Attr(\":class\", \"{ active: isActive, 'text-danger': hasError }\")",
    ),
    (
        "<div :style=\"{ color: activeColor, fontSize: fontSize + 'px' }\" class=\"styled\">Text</div>",
        'htmlgo.Div(htmlgo.Text("Text")).Class("styled")'
        ".Attr(\":style\", \"{ color: activeColor, fontSize: fontSize + 'px' }\")",
    ),
    (
        '<my-component :prop="value" @event="handler">Content</my-component>',
        'htmlgo.MyComponent(htmlgo.Text("Content")).Attr(":prop", "value").Attr("@event", "handler")',
    ),
    (COMPLEX_COMPONENT, COMPLEX_COMPONENT_CODE),
]


@pytest.mark.parametrize("markup, expected", PLAIN_CASES)
def test_plain_markup(markup: str, expected: str):
    assert convert_html_to_code(markup) == expected


@pytest.mark.parametrize("markup, expected", TEMPLATE_CASES)
def test_template_markup(markup: str, expected: str):
    assert convert_html_to_code(markup) == expected


@pytest.mark.parametrize("markup", ["", "   ", "\n\t  \n"])
def test_blank_input_returns_sentinel(markup: str):
    assert convert_html_to_code(markup) == EMPTY_SENTINEL == "htmlgo."


@pytest.mark.parametrize(
    "markup, expected",
    [
        ("Hello World", 'htmlgo.Text("Hello World")'),
        ("  padded text \n", 'htmlgo.Text("padded text")'),
        ('Say "hi" & wave', 'htmlgo.Text("Say \\"hi\\" & wave")'),
        ("a {{ b }} c", 'htmlgo.Text("a {{ b }} c")'),
    ],
)
def test_text_without_markup_is_wrapped(markup: str, expected: str):
    assert convert_html_to_code(markup) == expected


@pytest.mark.parametrize("markup", ["<div><unclosed>", "<unclosed>", "<p>text</p><bogus>"])
def test_dangling_start_tag_is_invalid(markup: str):
    with pytest.raises(ConversionError) as excinfo:
        convert_html_to_code(markup)
    assert excinfo.value.kind is ErrorKind.INVALID_HTML
    assert str(excinfo.value).startswith("InvalidHTML: unclosed tag detected")


@pytest.mark.parametrize(
    "markup, expected",
    [
        ("<div>", "htmlgo.Div()"),
        ("<section>", "htmlgo.Section()"),
        ("<ul><li>", "htmlgo.Ul(htmlgo.Li())"),
        ("<div><my-widget>", "htmlgo.Div(htmlgo.MyWidget())"),
    ],
)
def test_truncated_known_elements_are_closed_by_the_parser(markup: str, expected: str):
    assert convert_html_to_code(markup) == expected


def test_unclosed_tag_message_names_the_tag():
    with pytest.raises(ConversionError) as excinfo:
        convert_html_to_code("<div><unclosed>")
    assert excinfo.value.message == "unclosed tag detected: <unclosed>"


def test_void_elements_are_not_dangling():
    assert convert_html_to_code('<img src="a.png">') == 'htmlgo.Img().Attr("src", "a.png")'
    assert convert_html_to_code("<br>") == "htmlgo.Br()"


def test_document_wrapper_resolves_to_first_body_element():
    markup = (
        "<!DOCTYPE html><html><head><title>t</title></head>"
        "<body>\n  <main id=\"m\"><p>x</p></main><footer></footer></body></html>"
    )
    assert convert_html_to_code(markup) == 'htmlgo.Main(htmlgo.P(htmlgo.Text("x"))).Id("m")'


def test_document_without_body_is_reported():
    with pytest.raises(ConversionError) as excinfo:
        convert_html_to_code("<html><head><title>t</title></head></html>")
    assert excinfo.value.kind is ErrorKind.NO_BODY


def test_document_with_empty_body_is_reported():
    with pytest.raises(ConversionError) as excinfo:
        convert_html_to_code("<html><body>  </body></html>")
    assert excinfo.value.kind is ErrorKind.EMPTY_BODY
    assert excinfo.value.node is not None
    assert excinfo.value.node.name == "body"


def test_comment_only_markup_has_no_content():
    with pytest.raises(ConversionError) as excinfo:
        convert_html_to_code("<!-- nothing here -->")
    assert excinfo.value.kind is ErrorKind.NO_CONTENT


def test_leading_text_is_the_content_root():
    assert convert_html_to_code("hello <b>world</b>") == 'htmlgo.Text("hello")'


def test_primary_setters_are_ordered_before_everything_else():
    markup = '<div data-x="1" style="s" title="t" class="c" id="i" type="k">x</div>'
    assert convert_html_to_code(markup) == (
        'htmlgo.Div(htmlgo.Text("x")).Type("k").Id("i").Class("c").Style("s")'
        '.Attr("data-x", "1").Attr("title", "t")'
    )


def test_duplicate_attributes_keep_first_value():
    assert convert_html_to_code('<div id="a" id="b"></div>') == 'htmlgo.Div().Id("a")'
